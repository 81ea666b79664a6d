import customtkinter as ctk
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from models.expense import Expense, PaymentMode
from services.category_manager import CategoryManager
from services.expense_manager import ExpenseManager
from ui.components.dialogs import ConfirmDialog, MessageDialog
from ui.components.expense_form import ExpenseForm
from ui.components.summary_card import SummaryCard
from utils.constants import MODE_COLORS, UNKNOWN_CATEGORY
from utils.currency import format_currency

BASE_FILTERS = ["All", "Recurring", "Non-recurring"] + [m.label for m in PaymentMode]
CATEGORY_PREFIX = "Category: "

SORTS = {
    "ID":           ExpenseManager.by_id,
    "Title":        ExpenseManager.by_title,
    "Amount":       ExpenseManager.by_amount,
    "Payment Mode": ExpenseManager.by_mode,
    "Recurring":    ExpenseManager.by_recurring,
}


class ExpensesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        expense_manager: ExpenseManager,
        category_manager: CategoryManager,
        notify_refresh,
        currency_symbol: str,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._mgr = expense_manager
        self._cat_mgr = category_manager
        self._notify_refresh = notify_refresh
        self._symbol = currency_symbol
        self._categories = []

        self._filter_var = ctk.StringVar(value="All")
        self._sort_var = ctk.StringVar(value="ID")
        self._desc_var = ctk.BooleanVar(value=False)

        self.grid_columnconfigure(0, weight=3)
        self.grid_columnconfigure(1, weight=2)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_summary()
        self._build_list()
        self._build_chart()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="Show:").pack(side="left", padx=(12, 4), pady=8)
        self._filter_combo = ctk.CTkComboBox(
            bar, values=BASE_FILTERS, variable=self._filter_var, width=180,
            state="readonly", command=lambda _: self._load(),
        )
        self._filter_combo.pack(side="left", padx=(0, 12))

        ctk.CTkLabel(bar, text="Sort by:").pack(side="left", padx=(0, 4))
        ctk.CTkComboBox(
            bar, values=list(SORTS), variable=self._sort_var, width=140,
            state="readonly", command=lambda _: self._load(),
        ).pack(side="left")
        ctk.CTkCheckBox(
            bar, text="Descending", variable=self._desc_var, command=self._load,
        ).pack(side="left", padx=8)

        ctk.CTkButton(
            bar, text="+ Add Expense", command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

    def _build_summary(self):
        self._summary = ctk.CTkFrame(self, fg_color="transparent")
        self._summary.grid(row=1, column=0, columnspan=2, sticky="ew", padx=8, pady=8)

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=(8, 4), pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _build_chart(self):
        outer = ctk.CTkFrame(self, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=2, column=1, sticky="nsew", padx=(4, 8), pady=(0, 8))
        ctk.CTkLabel(
            outer, text="Spending by Payment Mode",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).pack(pady=(10, 0))
        self._fig = Figure(figsize=(3, 3), dpi=80, tight_layout=True)
        self._ax = self._fig.add_subplot(111)
        self._canvas = FigureCanvasTkAgg(self._fig, master=outer)
        self._canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))

    def _fetch(self):
        choice = self._filter_var.get()
        if choice == "Recurring":
            self._mgr.load_recurring()
        elif choice == "Non-recurring":
            self._mgr.load_non_recurring()
        elif choice in [m.label for m in PaymentMode]:
            self._mgr.load_by_mode(PaymentMode.from_label(choice))
        elif choice.startswith(CATEGORY_PREFIX):
            name = choice[len(CATEGORY_PREFIX):]
            cat = next((c for c in self._categories if c.name == name), None)
            if cat is None:
                self._filter_var.set("All")
                self._mgr.load_data()
            else:
                self._mgr.load_by_category(cat.id)
        else:
            self._mgr.load_data()

    def _ordering(self):
        ordering = SORTS.get(self._sort_var.get(), ExpenseManager.by_id)()
        return ordering.reversed() if self._desc_var.get() else ordering

    def _load(self):
        self._cat_mgr.load_data()
        self._categories = self._cat_mgr.all()
        self._filter_combo.configure(
            values=BASE_FILTERS + [CATEGORY_PREFIX + c.name for c in self._categories]
        )
        self._fetch()
        self._mgr.replace_all(self._mgr.sort(self._ordering()))
        self._render_summary()
        self._render_rows()
        self._render_chart()

    def _render_summary(self):
        for w in self._summary.winfo_children():
            w.destroy()
        totals = self._mgr.totals_by_mode()
        shares = self._mgr.mode_percentages()
        by_category = self._mgr.totals_by_category()
        top = max(by_category, key=by_category.get, default=None)
        cards = [
            ("Expenses", str(self._mgr.size()), "#2196F3"),
            ("Total Amount", format_currency(self._mgr.total_amount(), self._symbol), "#4CAF50"),
            ("Top Category", self._category_name(top) if top is not None else "-", "#9C27B0"),
        ] + [
            (
                m.label,
                f"{format_currency(totals[m], self._symbol)} ({shares[m]:.1f}%)",
                MODE_COLORS[m.code],
            )
            for m in PaymentMode
        ]
        for col, (title, value, color) in enumerate(cards):
            SummaryCard(self._summary, title, value, color).grid(
                row=0, column=col, padx=4, sticky="ew"
            )
            self._summary.grid_columnconfigure(col, weight=1)

    def _render_rows(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        expenses = self._mgr.all()
        if not expenses:
            ctk.CTkLabel(
                self._scroll, text="No expenses found.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        for idx, exp in enumerate(expenses):
            self._add_row(idx, exp, self._category_name(exp.category_id))

    def _category_name(self, category_id: int) -> str:
        cat = self._cat_mgr.find_by_id(category_id)
        return cat.name if cat else UNKNOWN_CATEGORY

    def _add_row(self, idx: int, exp: Expense, category_name: str):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(0, weight=1)

        info = ctk.CTkFrame(row, fg_color="transparent")
        info.grid(row=0, column=0, padx=8, pady=4, sticky="w")
        ctk.CTkLabel(
            info, text=exp.title, font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(anchor="w")
        ctk.CTkLabel(
            info, text=f"{category_name} · {exp.mode.label} · {exp.recurring_label}",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).pack(anchor="w")

        ctk.CTkLabel(
            row, text=format_currency(exp.amount, self._symbol), width=110,
            font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, padx=4)

        btn_frame = ctk.CTkFrame(row, fg_color="transparent")
        btn_frame.grid(row=0, column=2, padx=(4, 10), pady=6)
        ctk.CTkButton(
            btn_frame, text="Edit", width=60, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda e=exp: self._open_edit(e),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btn_frame, text="Delete", width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda e=exp: self._on_delete(e),
        ).pack(side="left")

    def _render_chart(self):
        self._ax.clear()
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        self._fig.patch.set_facecolor(bg)
        self._ax.set_facecolor(bg)

        totals = [(m, t) for m, t in self._mgr.totals_by_mode().items() if t > 0]
        if totals:
            self._ax.pie(
                [t for _, t in totals],
                labels=[m.label for m, _ in totals],
                colors=[MODE_COLORS[m.code] for m, _ in totals],
                autopct="%1.0f%%",
                startangle=90,
                textprops={"fontsize": 8, "color": "#aaaaaa" if is_dark else "#444444"},
            )
            self._ax.axis("equal")
        else:
            self._ax.text(0.5, 0.5, "No data", ha="center", va="center", color="gray")
            self._ax.axis("off")
        self._canvas.draw()

    def _open_add(self):
        form = ExpenseForm(self.winfo_toplevel(), self._mgr, self._categories)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("expense")

    def _open_edit(self, exp: Expense):
        form = ExpenseForm(self.winfo_toplevel(), self._mgr, self._categories, expense=exp)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("expense")

    def _on_delete(self, exp: Expense):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Expense",
            message=f"Are you sure you want to delete '{exp.title}'?",
        )
        if not dlg.result:
            return
        if not self._mgr.delete(exp):
            MessageDialog(self.winfo_toplevel(), "Error",
                          "Failed to delete expense.", error=True)
        self._notify_refresh("expense")
