import customtkinter as ctk


class _ModalDialog(ctk.CTkToplevel):
    def __init__(self, master, title: str, message: str, **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        self._btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")

    def _show(self):
        self.transient(self.master)
        self.grab_set()
        self._center()
        self.wait_window()

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_width(), self.winfo_height()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")


class ConfirmDialog(_ModalDialog):
    """Yes/no question. Blocks until closed; answer in .result."""

    def __init__(self, master, title: str, message: str,
                 confirm_text: str = "Delete", **kwargs):
        super().__init__(master, title, message, **kwargs)
        self.result = False

        ctk.CTkButton(
            self._btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            self._btn_frame, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._on_confirm,
        ).pack(side="left")

        self._show()

    def _on_confirm(self):
        self.result = True
        self.destroy()


class MessageDialog(_ModalDialog):
    """One-button notice (report written, delete refused, ...)."""

    def __init__(self, master, title: str, message: str, error: bool = False, **kwargs):
        super().__init__(master, title, message, **kwargs)
        ctk.CTkButton(
            self._btn_frame, text="OK", width=90,
            fg_color="#F44336" if error else None,
            hover_color="#D32F2F" if error else None,
            command=self.destroy,
        ).pack(side="left")
        self._show()
