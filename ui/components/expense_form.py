import customtkinter as ctk
from models.category import Category
from models.expense import Expense, PaymentMode
from services.expense_manager import ExpenseManager


class ExpenseForm(ctk.CTkToplevel):
    """Add or edit an expense."""

    MODES = [m.label for m in PaymentMode]

    def __init__(
        self,
        master,
        expense_manager: ExpenseManager,
        categories: list[Category],
        expense: Expense | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._mgr = expense_manager
        self._expense = expense
        self._cat_by_name = {c.name: c for c in categories}
        self.saved = False

        self.title("Edit Expense" if expense else "New Expense")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        ctk.CTkLabel(self, text="Title:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._title_var = ctk.StringVar(value=expense.title if expense else "")
        ctk.CTkEntry(self, textvariable=self._title_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        ctk.CTkLabel(self, text="Amount:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._amount_var = ctk.StringVar(value=f"{expense.amount:.2f}" if expense else "")
        ctk.CTkEntry(self, textvariable=self._amount_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        ctk.CTkLabel(self, text="Payment Mode:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        mode = expense.mode if expense else PaymentMode.CASH
        self._mode_var = ctk.StringVar(value=mode.label)
        ctk.CTkComboBox(
            self, values=self.MODES, variable=self._mode_var,
            width=240, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        ctk.CTkLabel(self, text="Category:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        names = list(self._cat_by_name)
        current = ""
        if expense:
            current = next(
                (c.name for c in categories if c.id == expense.category_id), ""
            )
        elif names:
            current = names[0]
        self._cat_var = ctk.StringVar(value=current)
        ctk.CTkComboBox(
            self, values=names or [""], variable=self._cat_var,
            width=240, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        self._recurring_var = ctk.BooleanVar(value=expense.recurring if expense else False)
        ctk.CTkCheckBox(self, text="Recurring", variable=self._recurring_var).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="w"
        )
        r += 1

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=320, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        ctk.CTkButton(btn_frame, text="Save", width=90, command=self._on_save).pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _on_save(self):
        category = self._cat_by_name.get(self._cat_var.get())
        if category is None:
            self._error_var.set("Choose a category (add one on the Categories tab first).")
            return
        try:
            amount = float(self._amount_var.get().replace(",", "").strip())
        except ValueError:
            self._error_var.set("Amount must be a number.")
            return
        expense = Expense(
            id=self._expense.id if self._expense else 0,
            title=self._title_var.get(),
            amount=amount,
            mode=PaymentMode.from_label(self._mode_var.get()),
            recurring=self._recurring_var.get(),
            category_id=category.id,
        )
        try:
            if self._expense:
                ok = self._mgr.update(expense)
            else:
                ok = self._mgr.save(expense)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        if not ok:
            self._error_var.set("Could not save the expense. Please try again.")
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
