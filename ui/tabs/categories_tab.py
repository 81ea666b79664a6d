import customtkinter as ctk
from models.category import Category, Priority
from services.category_manager import CategoryManager
from services.expense_manager import ExpenseManager
from ui.components.category_form import CategoryForm
from ui.components.dialogs import ConfirmDialog, MessageDialog
from ui.components.summary_card import SummaryCard
from utils.constants import PRIORITY_COLORS
from utils.currency import format_currency

FILTERS = ["All", "Active", "Inactive", "High", "Medium", "Low", "Over budget"]

SORTS = {
    "ID":            CategoryManager.by_id,
    "Name":          CategoryManager.by_name,
    "Monthly Limit": CategoryManager.by_monthly_limit,
    "Priority":      CategoryManager.by_priority,
    "Active":        CategoryManager.by_active_status,
}


class CategoriesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        category_manager: CategoryManager,
        expense_manager: ExpenseManager,
        notify_refresh,
        currency_symbol: str,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._mgr = category_manager
        self._expense_mgr = expense_manager
        self._notify_refresh = notify_refresh
        self._symbol = currency_symbol

        self._filter_var = ctk.StringVar(value="All")
        self._sort_var = ctk.StringVar(value="ID")
        self._desc_var = ctk.BooleanVar(value=False)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._build_summary()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkLabel(bar, text="Show:").pack(side="left", padx=(12, 4), pady=8)
        ctk.CTkComboBox(
            bar, values=FILTERS, variable=self._filter_var, width=130,
            state="readonly", command=lambda _: self._load(),
        ).pack(side="left", padx=(0, 12))

        ctk.CTkLabel(bar, text="Sort by:").pack(side="left", padx=(0, 4))
        ctk.CTkComboBox(
            bar, values=list(SORTS), variable=self._sort_var, width=140,
            state="readonly", command=lambda _: self._load(),
        ).pack(side="left")
        ctk.CTkCheckBox(
            bar, text="Descending", variable=self._desc_var, command=self._load,
        ).pack(side="left", padx=8)

        ctk.CTkButton(
            bar, text="+ Add Category", command=self._open_add,
        ).pack(side="right", padx=8, pady=6)

    def _build_summary(self):
        self._summary = ctk.CTkFrame(self, fg_color="transparent")
        self._summary.grid(row=1, column=0, sticky="ew", padx=8, pady=8)

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _fetch(self):
        choice = self._filter_var.get()
        if choice == "Active":
            self._mgr.load_active()
        elif choice == "Over budget":
            self._mgr.load_over_budget()
        elif choice in ("High", "Medium", "Low"):
            self._mgr.load_by_priority(Priority.from_label(choice))
        else:
            self._mgr.load_data()
            if choice == "Inactive":
                self._mgr.replace_all(self._mgr.inactive())

    def _ordering(self):
        factory = SORTS.get(self._sort_var.get(), CategoryManager.by_id)
        ordering = factory()
        return ordering.reversed() if self._desc_var.get() else ordering

    def _load(self):
        self._fetch()
        self._mgr.replace_all(self._mgr.sort(self._ordering()))
        self._render_summary()
        self._render_rows()

    def _render_summary(self):
        for w in self._summary.winfo_children():
            w.destroy()
        counts = self._mgr.count_by_priority()
        cards = [
            ("Categories", str(self._mgr.size()), "#2196F3"),
            ("Active", str(self._mgr.active_count()), "#4CAF50"),
        ] + [
            (f"{p.label} Priority", str(counts[p]), PRIORITY_COLORS[p.code])
            for p in Priority
        ]
        for col, (title, value, color) in enumerate(cards):
            SummaryCard(self._summary, title, value, color).grid(
                row=0, column=col, padx=4, sticky="ew"
            )
            self._summary.grid_columnconfigure(col, weight=1)

    def _render_rows(self):
        for w in self._scroll.winfo_children():
            w.destroy()

        categories = self._mgr.all()
        if not categories:
            ctk.CTkLabel(
                self._scroll, text="No categories found.", text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        spent = self._expense_mgr.spending_by_category()

        hdr = ctk.CTkFrame(self._scroll, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=4, pady=(0, 2))
        hdr.grid_columnconfigure(0, weight=1)
        for col, (text, width) in enumerate(
            [("Name", 0), ("Limit", 110), ("Spent", 110), ("Priority", 80), ("", 140)]
        ):
            ctk.CTkLabel(
                hdr, text=text, width=width, anchor="w" if col == 0 else "center",
                text_color="gray60", font=ctk.CTkFont(size=11),
            ).grid(row=0, column=col, padx=8, sticky="w" if col == 0 else "")

        for idx, cat in enumerate(categories):
            self._add_row(idx + 1, cat, spent.get(cat.id, 0.0))

    def _add_row(self, idx: int, cat: Category, spent: float):
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(0, weight=1)

        name_frame = ctk.CTkFrame(row, fg_color="transparent")
        name_frame.grid(row=0, column=0, padx=8, sticky="w")
        ctk.CTkLabel(
            name_frame, text=cat.name,
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(side="left")
        if not cat.active:
            ctk.CTkLabel(
                name_frame, text="inactive",
                text_color="gray60", font=ctk.CTkFont(size=10),
            ).pack(side="left", padx=(6, 0))

        ctk.CTkLabel(
            row, text=format_currency(cat.monthly_limit, self._symbol), width=110,
        ).grid(row=0, column=1, padx=4)
        over = spent > cat.monthly_limit
        ctk.CTkLabel(
            row, text=format_currency(spent, self._symbol), width=110,
            text_color="#F44336" if over else ("gray10", "gray90"),
        ).grid(row=0, column=2, padx=4)
        ctk.CTkLabel(
            row, text=cat.priority.label, width=80,
            text_color=PRIORITY_COLORS[cat.priority.code],
            font=ctk.CTkFont(size=11, weight="bold"),
        ).grid(row=0, column=3, padx=4)

        btn_frame = ctk.CTkFrame(row, fg_color="transparent")
        btn_frame.grid(row=0, column=4, padx=(4, 10), pady=6)
        ctk.CTkButton(
            btn_frame, text="Edit", width=60, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_edit(c),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btn_frame, text="Delete", width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat: self._on_delete(c),
        ).pack(side="left")

    def _open_add(self):
        form = CategoryForm(self.winfo_toplevel(), self._mgr)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _open_edit(self, cat: Category):
        form = CategoryForm(self.winfo_toplevel(), self._mgr, category=cat)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _on_delete(self, cat: Category):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            title="Delete Category",
            message=f"Are you sure you want to delete category '{cat.name}'?",
        )
        if not dlg.result:
            return
        try:
            ok = self._mgr.delete(cat, expense_manager=self._expense_mgr)
        except ValueError as e:
            MessageDialog(self.winfo_toplevel(), "Category In Use",
                          f"{e}\nDelete its expenses first.", error=True)
            return
        if not ok:
            MessageDialog(self.winfo_toplevel(), "Error",
                          "Failed to delete category.", error=True)
        self._notify_refresh("category")
