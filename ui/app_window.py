import os
from tkinter import filedialog

import customtkinter as ctk
from database.db_manager import DatabaseManager
from services.category_manager import CategoryManager
from services.expense_manager import ExpenseManager
from services.report_generator import default_report_filename, write_report
from ui.components.dialogs import MessageDialog
from ui.tabs.categories_tab import CategoriesTab
from ui.tabs.expenses_tab import ExpensesTab
from utils.app_config import get_report_folder, set_report_folder
from utils.constants import APP_NAME, APP_WIDTH, APP_HEIGHT, DEFAULT_CURRENCY_SYMBOL


_REFRESH_SCOPES: dict[str, set[str]] = {
    "expense":  {"expenses", "categories"},
    "category": {"expenses", "categories"},
    "full":     {"expenses", "categories"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        category_manager: CategoryManager,
        expense_manager: ExpenseManager,
        db: DatabaseManager | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._cat_mgr = category_manager
        self._exp_mgr = expense_manager
        self._db = db
        self._symbol = (
            db.get_setting("currency_symbol", DEFAULT_CURRENCY_SYMBOL)
            if db else DEFAULT_CURRENCY_SYMBOL
        )

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_header()
        self._build_tabs()

    # ── Header ──────────────────────────────────────────────────────────────
    def _build_header(self):
        bar = ctk.CTkFrame(self, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.grid_propagate(False)

        ctk.CTkLabel(
            bar, text=APP_NAME, font=ctk.CTkFont(size=15, weight="bold"),
        ).pack(side="left", padx=12, pady=8)

        ctk.CTkButton(
            bar, text="Generate Report", width=140, command=self._generate_report,
        ).pack(side="right", padx=12, pady=6)

    # ── Tabs ────────────────────────────────────────────────────────────────
    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self, command=self._on_tab_change)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(4, 8))

        for name in ("Expenses", "Categories"):
            self._tabview.add(name)
            self._tabview.tab(name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(name).grid_rowconfigure(0, weight=1)

        self._tabs = {
            "expenses": ExpensesTab(
                self._tabview.tab("Expenses"),
                expense_manager=self._exp_mgr,
                category_manager=self._cat_mgr,
                notify_refresh=self._refresh,
                currency_symbol=self._symbol,
            ),
            "categories": CategoriesTab(
                self._tabview.tab("Categories"),
                category_manager=self._cat_mgr,
                expense_manager=self._exp_mgr,
                notify_refresh=self._refresh,
                currency_symbol=self._symbol,
            ),
        }
        for tab in self._tabs.values():
            tab.grid(row=0, column=0, sticky="nsew")

    def _on_tab_change(self):
        key = self._tabview.get().lower()
        if key in self._tabs:
            self._tabs[key].refresh()

    def _refresh(self, scope: str = "full"):
        # Only the visible tab reloads now; the other reloads when shown.
        visible = self._tabview.get().lower()
        if visible in _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"]):
            self._tabs[visible].refresh()

    # ── Report ──────────────────────────────────────────────────────────────
    def _generate_report(self):
        self._exp_mgr.load_data()
        self._cat_mgr.load_data()
        if self._exp_mgr.size() == 0:
            MessageDialog(self, "No Data", "No expense data to generate a report.")
            self._refresh("full")
            return

        path = filedialog.asksaveasfilename(
            parent=self,
            title="Save Expense Report",
            initialdir=get_report_folder(),
            initialfile=default_report_filename(),
            defaultextension=".txt",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")],
        )
        if path:
            ok = write_report(
                self._exp_mgr.all(), self._cat_mgr.all(), path,
                currency_symbol=self._symbol,
            )
            if ok:
                set_report_folder(os.path.dirname(path))
                MessageDialog(self, "Report Generated", f"Report saved to:\n{path}")
            else:
                MessageDialog(self, "Report Error", "Failed to generate report.", error=True)
        self._refresh("full")
