import customtkinter as ctk
from models.category import Category, Priority
from services.category_manager import CategoryManager


class CategoryForm(ctk.CTkToplevel):
    """Add or edit a category."""

    PRIORITIES = [p.label for p in Priority]

    def __init__(
        self,
        master,
        category_manager: CategoryManager,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._mgr = category_manager
        self._category = category
        self.saved = False

        self.title("Edit Category" if category else "New Category")
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Name
        ctk.CTkLabel(self, text="Name:").grid(
            row=r, column=0, padx=(16, 8), pady=(16, 4), sticky="e"
        )
        self._name_var = ctk.StringVar(value=category.name if category else "")
        ctk.CTkEntry(self, textvariable=self._name_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        # Monthly limit
        ctk.CTkLabel(self, text="Monthly Limit:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        self._limit_var = ctk.StringVar(
            value=f"{category.monthly_limit:.2f}" if category else ""
        )
        ctk.CTkEntry(self, textvariable=self._limit_var, width=220).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Priority
        ctk.CTkLabel(self, text="Priority:").grid(
            row=r, column=0, padx=(16, 8), pady=4, sticky="e"
        )
        current = category.priority if category else Priority.MEDIUM
        self._priority_var = ctk.StringVar(value=current.label)
        ctk.CTkComboBox(
            self, values=self.PRIORITIES, variable=self._priority_var,
            width=220, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Active
        self._active_var = ctk.BooleanVar(value=category.active if category else True)
        ctk.CTkCheckBox(self, text="Active", variable=self._active_var).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="w"
        )
        r += 1

        # Error
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        # Buttons
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
        try:
            limit = float(self._limit_var.get().replace(",", "").strip())
        except ValueError:
            self._error_var.set("Monthly limit must be a number.")
            return
        # Build a fresh record so a failed update leaves the cached one untouched
        category = Category(
            id=self._category.id if self._category else 0,
            name=self._name_var.get(),
            monthly_limit=limit,
            priority=Priority.from_label(self._priority_var.get()),
            active=self._active_var.get(),
        )
        try:
            if self._category:
                ok = self._mgr.update(category)
            else:
                ok = self._mgr.save(category)
        except ValueError as e:
            self._error_var.set(str(e))
            return
        if not ok:
            self._error_var.set("Could not save the category. Is the name already in use?")
            return
        self.saved = True
        self.destroy()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
