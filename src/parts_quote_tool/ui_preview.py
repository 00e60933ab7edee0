from __future__ import annotations

import logging
import os
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import List

from . import config
from .catalog_reader import load_catalog
from .csv_writer import save_csv
from .excel_writer import generate_quote_workbook
from .models import DisplayRow, QuoteToolError
from .numeric import format_amount, format_cell
from .pricing import subtotal
from .session import AddPart, Checkout, RemovePart, Search, SetDiscount, SetQuantity, QuoteSession

log = logging.getLogger(__name__)


class App(ttk.Frame):
    def __init__(self, master: tk.Tk, session: QuoteSession | None = None):
        super().__init__(master)
        self.master = master
        self.master.title("Parts Quote Builder")
        self.master.geometry("1100x650")

        self.grid(sticky="nsew")
        self.master.columnconfigure(0, weight=1)
        self.master.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)
        self.rowconfigure(4, weight=1)

        self.session = session or QuoteSession()
        self.session.subscribe(self.refresh_table)

        self.path_var = tk.StringVar(value=config.CATALOG_SOURCE)
        self.info_var = tk.StringVar(value="Loading catalog...")
        self.search_var = tk.StringVar(value="")
        self.qty_var = tk.StringVar(value="")

        self._editing = None  # part whose quantity the entry box edits
        self._build_ui()
        self.search_var.trace_add("write", lambda *_: self.update_suggestions())
        self.qty_var.trace_add("write", lambda *_: self.on_quantity_typed())

    def _build_ui(self):
        pad = {"padx": 10, "pady": 6}

        top = ttk.Frame(self)
        top.grid(row=0, column=0, sticky="ew", **pad)
        top.columnconfigure(1, weight=1)

        ttk.Label(top, text="Catalog:").grid(row=0, column=0, sticky="w")
        ttk.Entry(top, textvariable=self.path_var).grid(row=0, column=1, sticky="ew", padx=8)
        ttk.Button(top, text="Browse…", command=self.pick_file).grid(row=0, column=2)
        ttk.Button(top, text="Reload", command=self.load_catalog).grid(row=0, column=3, padx=5)
        ttk.Button(top, text="Checkout", command=self.open_checkout).grid(row=0, column=4, padx=5)

        search = ttk.Frame(self)
        search.grid(row=1, column=0, sticky="ew", **pad)
        search.columnconfigure(1, weight=1)
        ttk.Label(search, text="Part No:").grid(row=0, column=0, sticky="w")
        self.search_entry = ttk.Entry(search, textvariable=self.search_var, state="disabled")
        self.search_entry.grid(row=0, column=1, sticky="ew", padx=8)
        self.suggestions = tk.Listbox(search, height=6)
        self.suggestions.bind("<<ListboxSelect>>", self.pick_suggestion)

        self.chips = ttk.Frame(self)
        self.chips.grid(row=2, column=0, sticky="ew", **pad)

        ttk.Label(self, textvariable=self.info_var).grid(row=3, column=0, sticky="w", **pad)

        self.tree = ttk.Treeview(self, show="headings")
        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=4, column=0, sticky="nsew", padx=10, pady=(0, 6))
        vsb.grid(row=4, column=1, sticky="ns", pady=(0, 6))
        self.tree.bind("<<TreeviewSelect>>", self.on_row_selected)

        bottom = ttk.Frame(self)
        bottom.grid(row=5, column=0, sticky="ew", **pad)
        ttk.Label(bottom, text="Quantity for selected row:").grid(row=0, column=0, sticky="w")
        self.qty_entry = ttk.Entry(bottom, textvariable=self.qty_var, width=10)
        self.qty_entry.grid(row=0, column=1, padx=8)

    # ---------- catalog ----------

    def pick_file(self):
        path = filedialog.askopenfilename(
            title="Select product list",
            filetypes=[("Product lists", "*.csv *.xlsx *.xlsm *.xls"), ("All files", "*.*")]
        )
        if not path:
            return
        self.path_var.set(path)
        self.load_catalog()

    def load_catalog(self):
        self.search_entry.configure(state="disabled")
        self.info_var.set("Loading catalog...")
        self.update_idletasks()

        try:
            catalog = load_catalog(self.path_var.get())
        except QuoteToolError as e:
            messagebox.showerror("Catalog error", str(e))
            self.info_var.set("Catalog not loaded.")
            return

        self.session.load(catalog)
        self.search_entry.configure(state="normal")
        self.search_entry.focus_set()

    # ---------- search / selection ----------

    def update_suggestions(self):
        matches = self.session.dispatch(Search(self.search_var.get()))
        self.suggestions.delete(0, "end")
        if not matches:
            self.suggestions.grid_remove()
            return
        for part_no in matches:
            self.suggestions.insert("end", part_no)
        self.suggestions.grid(row=1, column=1, sticky="ew", padx=8)

    def pick_suggestion(self, _event=None):
        sel = self.suggestions.curselection()
        if not sel:
            return
        part_no = self.suggestions.get(sel[0])
        self.session.dispatch(AddPart(part_no))
        self.search_var.set("")

    def remove_part(self, part_no: str):
        if part_no == self._editing:
            self._editing = None
        self.session.dispatch(RemovePart(part_no))

    def on_row_selected(self, _event=None):
        sel = self.tree.selection()
        if not sel:
            return
        if sel[0] == self._editing:
            return
        self._editing = None  # prefilling the box is not an edit
        self.qty_var.set(self.tree.set(sel[0], "Quantity"))
        self._editing = sel[0]

    def on_quantity_typed(self):
        if self._editing:
            self.session.dispatch(SetQuantity(self._editing, self.qty_var.get()))

    # ---------- rendering ----------

    def refresh_table(self, rows: List[DisplayRow]):
        for child in self.chips.winfo_children():
            child.destroy()
        for part_no in self.session.selection.to_sequence():
            ttk.Button(self.chips, text=f"{part_no}  ×",
                       command=lambda p=part_no: self.remove_part(p)).pack(side="left", padx=2)

        editing = self._editing
        for item in self.tree.get_children():
            self.tree.delete(item)

        if not self.session.ready:
            return

        cols = list(self.session.catalog.headers) + ["Quantity", "Final Price"]
        self.tree.configure(columns=cols)
        for c in cols:
            self.tree.heading(c, text=c)
            self.tree.column(c, width=120, anchor="w")

        if not rows:
            self.info_var.set("No data found.")
            return

        for r in rows:
            values = [format_cell(r.value(h)) for h in self.session.catalog.headers]
            values += [r.quantity, r.value("Final Price")]
            self.tree.insert("", "end", iid=r.part_no, values=values)

        if editing and self.tree.exists(editing):
            self.tree.selection_set(editing)

        total = format_amount(subtotal(rows), config.CURRENCY_SYMBOL)
        self.info_var.set(f"{len(rows)} parts selected | Total: {total}")

    # ---------- checkout / export ----------

    def open_checkout(self):
        quote = self.session.dispatch(Checkout(0))
        if quote.is_empty():
            messagebox.showwarning("Warning", "No parts selected.")
            return
        CheckoutDialog(self, self.session)


class CheckoutDialog(tk.Toplevel):
    def __init__(self, app: App, session: QuoteSession):
        super().__init__(app.master)
        self.title("Quote summary")
        self.session = session

        cols = config.SUMMARY_COLUMNS
        self.tree = ttk.Treeview(self, columns=cols, show="headings", height=10)
        for c in cols:
            self.tree.heading(c, text=c)
            self.tree.column(c, width=110, anchor="w")
        self.tree.grid(row=0, column=0, columnspan=4, sticky="nsew", padx=10, pady=10)

        self.discount_var = tk.StringVar(value="0")
        self.total_var = tk.StringVar(value="")
        ttk.Label(self, text="Discount %:").grid(row=1, column=0, sticky="w", padx=10)
        ttk.Spinbox(self, from_=0, to=100, textvariable=self.discount_var, width=8).grid(row=1, column=1, sticky="w")
        ttk.Label(self, textvariable=self.total_var).grid(row=1, column=2, sticky="e", padx=10)
        ttk.Button(self, text="Export CSV", command=self.export_csv).grid(row=2, column=2, pady=10)
        ttk.Button(self, text="Export Excel", command=self.export_excel).grid(row=2, column=3, padx=10, pady=10)

        self.discount_var.trace_add("write", lambda *_: self.update_total())
        # edits in the main window while this is open change the quote
        session.subscribe(lambda _rows: self.show_quote())
        self.update_total()

    def update_total(self):
        self.session.dispatch(SetDiscount(self.discount_var.get()))
        self.show_quote()

    def show_quote(self):
        quote = self.session.current_snapshot
        if quote is None or not self.winfo_exists():
            return
        for item in self.tree.get_children():
            self.tree.delete(item)
        for r in quote.rows:
            self.tree.insert("", "end", values=[r.value(c) for c in config.SUMMARY_COLUMNS])
        sym = config.CURRENCY_SYMBOL
        self.total_var.set(
            f"Total: {format_amount(quote.subtotal, sym)}  |  Final Total: {format_amount(quote.final_total, sym)}"
        )

    def export_csv(self):
        save_path = filedialog.asksaveasfilename(
            parent=self,
            defaultextension=".csv",
            initialfile=f"{config.DEFAULT_EXPORT_NAME}.csv",
            filetypes=[("CSV files", "*.csv")],
            title="Save quote"
        )
        if not save_path:
            return  # User cancelled

        stem = os.path.splitext(os.path.basename(save_path))[0]
        _, text = self.session.export(stem)
        path = save_csv(text, os.path.dirname(save_path), stem)
        messagebox.showinfo("Success", f"Quote saved to:\n{path}", parent=self)
        self.destroy()

    def export_excel(self):
        save_path = filedialog.asksaveasfilename(
            parent=self,
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            title="Save quote"
        )
        if not save_path:
            return

        try:
            generate_quote_workbook(self.session.current_snapshot, save_path)
        except OSError as e:
            messagebox.showerror("Error", f"Failed to write Excel file:\n{e}", parent=self)
            return
        messagebox.showinfo("Success", f"Quote saved to:\n{save_path}", parent=self)


def main():
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
    root = tk.Tk()
    app = App(root)
    # catalog must be in before search is enabled
    root.after(0, app.load_catalog)
    root.mainloop()


if __name__ == "__main__":
    main()
