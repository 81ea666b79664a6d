import customtkinter as ctk


class SummaryCard(ctk.CTkFrame):
    """Small titled figure shown above the expense and category lists."""

    def __init__(self, master, title: str, value: str, color: str = "#2196F3", **kwargs):
        super().__init__(master, fg_color=("gray90", "gray20"), corner_radius=8, **kwargs)
        ctk.CTkLabel(
            self, text=title, text_color="gray60", font=ctk.CTkFont(size=11),
        ).pack(anchor="w", padx=12, pady=(8, 0))
        ctk.CTkLabel(
            self, text=value, text_color=color,
            font=ctk.CTkFont(size=16, weight="bold"),
        ).pack(anchor="w", padx=12, pady=(0, 8))
