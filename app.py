from __future__ import annotations

import json
import logging
import tkinter as tk
from tkinter import filedialog, messagebox

import config
from canvas_view import MapCanvasView
from exporter import PreviewExporter
from model import Area, InvalidAreaError, MapTemplate, parse_area, parse_vertices_text
from storage import load_template, save_template

logger = logging.getLogger(__name__)


class VenueMapApp:
    def __init__(self, template: MapTemplate | None = None, template_path: str | None = None) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.configure(bg=config.THEME["bg"])
        self.root.geometry("1400x900")

        self.template = template or MapTemplate.new()
        self.template_path = template_path
        self.is_dirty = False

        self._build_menu()
        self._build_layout()
        self._bind_shortcuts()

        self.map_view.render()
        self._refresh_areas()
        self._update_status()

    def run(self) -> None:
        self.root.mainloop()

    def _build_menu(self) -> None:
        menu = tk.Menu(self.root)
        self.root.config(menu=menu)

        file_menu = tk.Menu(menu, tearoff=0)
        file_menu.add_command(label="New", command=self.new_template)
        file_menu.add_command(label="Open...", command=self.open_template)
        file_menu.add_command(label="Save", command=self.save_template)
        file_menu.add_command(label="Save As...", command=self.save_template_as)
        file_menu.add_separator()
        file_menu.add_command(label="Export Preview...", command=self.export_preview)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.root.quit)
        menu.add_cascade(label="File", menu=file_menu)

        view_menu = tk.Menu(menu, tearoff=0)
        view_menu.add_command(label="Zoom In", command=self.zoom_in)
        view_menu.add_command(label="Zoom Out", command=self.zoom_out)
        view_menu.add_command(label="Reset View", command=self.reset_view)
        menu.add_cascade(label="View", menu=view_menu)

        help_menu = tk.Menu(menu, tearoff=0)
        help_menu.add_command(label="About", command=self.show_about)
        menu.add_cascade(label="Help", menu=help_menu)

    def _build_layout(self) -> None:
        self.main_frame = tk.Frame(self.root, bg=config.THEME["bg"])
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self.main_frame.columnconfigure(0, weight=0)
        self.main_frame.columnconfigure(1, weight=1)
        self.main_frame.columnconfigure(2, weight=0)
        self.main_frame.rowconfigure(0, weight=1)

        self.toolbar_frame = tk.Frame(self.main_frame, bg=config.THEME["panel"], padx=10, pady=10)
        self.toolbar_frame.grid(row=0, column=0, sticky="ns")

        self.canvas_frame = tk.Frame(self.main_frame, bg=config.THEME["bg"], padx=8, pady=8)
        self.canvas_frame.grid(row=0, column=1, sticky="nsew")
        self.canvas_frame.rowconfigure(0, weight=1)
        self.canvas_frame.columnconfigure(0, weight=1)

        self.sidebar_frame = tk.Frame(self.main_frame, bg=config.THEME["panel"], padx=10, pady=10)
        self.sidebar_frame.grid(row=0, column=2, sticky="ns")
        self.sidebar_frame.rowconfigure(1, weight=1)

        self.map_view = MapCanvasView(
            self.canvas_frame,
            self.template,
            on_selection_changed=self._on_selection_changed,
            on_view_changed=self._update_status,
        )
        self.map_view.canvas.grid(row=0, column=0, sticky="nsew")

        self._build_toolbar()
        self._build_areas_panel()
        self._build_status_bar()

    def _button(self, parent: tk.Widget, text: str, command, accent: bool = False) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            bg=config.THEME["accent"] if accent else config.THEME["panel_alt"],
            fg=config.THEME["text"],
            activebackground=config.THEME["accent"],
            activeforeground=config.THEME["text"],
            relief=tk.FLAT,
            width=12,
            pady=4,
        )

    def _build_toolbar(self) -> None:
        header = tk.Label(self.toolbar_frame, text="View", bg=config.THEME["panel"], fg=config.THEME["text"], font=(config.DEFAULT_FONT, 12, "bold"))
        header.pack(anchor="w", pady=(0, 10))

        for label, command in (
            ("Zoom In", self.zoom_in),
            ("Zoom Out", self.zoom_out),
            ("Reset", self.reset_view),
            ("Clear Selection", self.map_view.clear_selection),
        ):
            self._button(self.toolbar_frame, label, command).pack(fill=tk.X, pady=4)

    def _build_areas_panel(self) -> None:
        title = tk.Label(self.sidebar_frame, text="Areas", bg=config.THEME["panel"], fg=config.THEME["text"], font=(config.DEFAULT_FONT, 12, "bold"))
        title.grid(row=0, column=0, sticky="w")

        self.area_list = tk.Listbox(
            self.sidebar_frame,
            width=32,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            selectbackground=config.THEME["accent"],
            selectforeground=config.THEME["text"],
            highlightthickness=0,
            activestyle="none",
        )
        self.area_list.grid(row=1, column=0, sticky="nsew", pady=(6, 6))

        controls = tk.Frame(self.sidebar_frame, bg=config.THEME["panel"])
        controls.grid(row=2, column=0, sticky="ew")
        controls.columnconfigure(0, weight=1)
        controls.columnconfigure(1, weight=1)
        self._button(controls, "Add Area", self.add_area, accent=True).grid(row=0, column=0, sticky="ew", padx=2, pady=2)
        self._button(controls, "Delete Area", self.delete_area).grid(row=0, column=1, sticky="ew", padx=2, pady=2)

    def _build_status_bar(self) -> None:
        self.status_var = tk.StringVar(value="")
        status = tk.Label(self.root, textvariable=self.status_var, bg=config.THEME["panel_alt"], fg=config.THEME["muted"], anchor="w")
        status.pack(fill=tk.X, side=tk.BOTTOM)

    def _bind_shortcuts(self) -> None:
        self.root.bind("<Control-s>", lambda _e: self.save_template())
        self.root.bind("<Control-o>", lambda _e: self.open_template())
        self.root.bind("<Control-n>", lambda _e: self.new_template())
        self.root.bind("<Control-e>", lambda _e: self.export_preview())
        self.root.bind("<Control-0>", lambda _e: self.reset_view())
        self.root.bind("<Control-plus>", lambda _e: self.zoom_in())
        self.root.bind("<Control-minus>", lambda _e: self.zoom_out())
        self.root.bind("<Escape>", lambda _e: self.map_view.clear_selection())

    def zoom_in(self) -> None:
        self.map_view.zoom_in()

    def zoom_out(self) -> None:
        self.map_view.zoom_out()

    def reset_view(self) -> None:
        self.map_view.reset_view()

    def _on_selection_changed(self, area_id) -> None:
        self.area_list.selection_clear(0, tk.END)
        for idx, area in enumerate(self.template.areas):
            if area.id == area_id:
                self.area_list.selection_set(idx)
                self.area_list.see(idx)
                break
        self._update_status()

    def _refresh_areas(self) -> None:
        self.area_list.delete(0, tk.END)
        for area in self.template.areas:
            stage = " [stage]" if area.is_stage else ""
            zone = f" ({area.zone})" if area.zone else ""
            self.area_list.insert(tk.END, f"#{area.id} {area.name}{zone}{stage}")

    def add_area(self) -> None:
        AreaDialog(self.root, self.template.next_area_id(), self._on_area_created)

    def _on_area_created(self, area: Area) -> None:
        self.map_view.add_area(area)
        self._refresh_areas()
        self._mark_dirty()

    def delete_area(self) -> None:
        selection = self.area_list.curselection()
        if not selection:
            return
        area = self.template.areas[selection[0]]
        if not messagebox.askyesno("Delete Area", f"Delete area {area.name!r}?"):
            return
        self.map_view.remove_area(area.id)
        self._refresh_areas()
        self._mark_dirty()

    def new_template(self) -> None:
        if not self._confirm_discard():
            return
        self._set_template(MapTemplate.new(), None)

    def open_template(self) -> None:
        if not self._confirm_discard():
            return
        path = filedialog.askopenfilename(
            title="Open Map Template",
            filetypes=[("Map Template", f"*{config.TEMPLATE_EXTENSION}"), ("JSON", "*.json")],
        )
        if not path:
            return
        try:
            template = load_template(path)
        except (OSError, ValueError, KeyError) as exc:
            logger.error("Could not open %s: %s", path, exc)
            messagebox.showerror("Open", f"Could not open template:\n{exc}")
            return
        self._set_template(template, path)

    def _set_template(self, template: MapTemplate, path: str | None) -> None:
        self.template = template
        self.template_path = path
        self.is_dirty = False
        self.map_view.reset_view()
        self.map_view.set_template(template)
        self._refresh_areas()
        self._update_status()

    def save_template(self) -> None:
        if not self.template_path:
            self.save_template_as()
            return
        self._write_template(self.template_path)

    def save_template_as(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Save Map Template",
            defaultextension=config.TEMPLATE_EXTENSION,
            filetypes=[("Map Template", f"*{config.TEMPLATE_EXTENSION}"), ("JSON", "*.json")],
        )
        if not path:
            return
        self._write_template(path)

    def _write_template(self, path: str) -> None:
        try:
            save_template(self.template, path)
        except OSError as exc:
            logger.error("Could not save %s: %s", path, exc)
            messagebox.showerror("Save", f"Could not save template:\n{exc}")
            return
        self.template_path = path
        self.is_dirty = False
        self._update_status()

    def export_preview(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Export Preview",
            defaultextension=".png",
            filetypes=[("PNG", "*.png"), ("SVG", "*.svg")],
        )
        if not path:
            return
        selected = [self.map_view.selected_area_id] if self.map_view.selected_area_id is not None else []
        try:
            PreviewExporter(path).export(self.template, selected_ids=selected)
        except (OSError, ValueError) as exc:
            logger.error("Could not export preview to %s: %s", path, exc)
            messagebox.showerror("Export", f"Could not export preview:\n{exc}")
            return
        messagebox.showinfo("Export", "Preview exported successfully.")

    def _confirm_discard(self) -> bool:
        if not self.is_dirty:
            return True
        return messagebox.askyesno("Unsaved Changes", "You have unsaved changes. Continue?")

    def _mark_dirty(self) -> None:
        self.is_dirty = True
        self._update_status()

    def _update_status(self) -> None:
        name = self.template_path if self.template_path else self.template.name
        dirty = "*" if self.is_dirty else ""
        zoom = round(self.map_view.viewport.scale * 100)
        selected = self.map_view.selected_area_name() or "none"
        self.status_var.set(f"{name}{dirty}  |  {len(self.template.areas)} areas  |  Zoom {zoom}%  |  Selected: {selected}")

    def show_about(self) -> None:
        messagebox.showinfo("About", "Venue Map Designer\nDefine and browse polygonal seating areas.")


class AreaDialog:
    """Form for a new area; the payload goes through parse_area before it reaches the map."""

    def __init__(self, master: tk.Tk, area_id: int, on_created) -> None:
        self._area_id = area_id
        self._on_created = on_created
        self.window = tk.Toplevel(master)
        self.window.title("New Area")
        self.window.configure(bg=config.THEME["panel"], padx=12, pady=12)
        self.window.transient(master)

        self.name_var = tk.StringVar()
        self.zone_var = tk.StringVar()
        self.fill_var = tk.StringVar(value=config.DEFAULT_AREA_FILL)
        self.stage_var = tk.BooleanVar(value=False)

        row = 0
        row = self._add_entry("Name", self.name_var, row)
        row = self._add_entry("Zone", self.zone_var, row)
        row = self._add_entry("Fill Color", self.fill_var, row)

        tk.Label(self.window, text="Vertices (JSON)", bg=config.THEME["panel"], fg=config.THEME["muted"]).grid(row=row, column=0, sticky="nw")
        self.vertices_text = tk.Text(self.window, width=40, height=8, bg=config.THEME["panel_alt"], fg=config.THEME["text"], insertbackground=config.THEME["text"], relief=tk.FLAT)
        self.vertices_text.insert("1.0", json.dumps([{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}], indent=2))
        self.vertices_text.grid(row=row, column=1, sticky="ew", pady=2)
        row += 1

        tk.Checkbutton(
            self.window,
            text="Stage",
            variable=self.stage_var,
            bg=config.THEME["panel"],
            fg=config.THEME["text"],
            selectcolor=config.THEME["panel_alt"],
            activebackground=config.THEME["panel"],
        ).grid(row=row, column=1, sticky="w")
        row += 1

        buttons = tk.Frame(self.window, bg=config.THEME["panel"])
        buttons.grid(row=row, column=0, columnspan=2, sticky="e", pady=(8, 0))
        tk.Button(buttons, text="Cancel", command=self.window.destroy, bg=config.THEME["panel_alt"], fg=config.THEME["text"], relief=tk.FLAT).pack(side=tk.RIGHT, padx=4)
        tk.Button(buttons, text="Create", command=self._submit, bg=config.THEME["accent"], fg=config.THEME["text"], relief=tk.FLAT).pack(side=tk.RIGHT)

    def _add_entry(self, label: str, variable: tk.StringVar, row: int) -> int:
        tk.Label(self.window, text=label, bg=config.THEME["panel"], fg=config.THEME["muted"]).grid(row=row, column=0, sticky="w")
        entry = tk.Entry(self.window, textvariable=variable, bg=config.THEME["panel_alt"], fg=config.THEME["text"], insertbackground=config.THEME["text"], relief=tk.FLAT)
        entry.grid(row=row, column=1, sticky="ew", pady=2)
        return row + 1

    def _submit(self) -> None:
        try:
            payload = {
                "name": self.name_var.get(),
                "vertices": parse_vertices_text(self.vertices_text.get("1.0", tk.END)),
                "zone": self.zone_var.get(),
                "fillColor": self.fill_var.get().strip(),
                "isStage": self.stage_var.get(),
            }
            area = parse_area(payload, area_id=self._area_id)
        except InvalidAreaError as exc:
            messagebox.showerror("Invalid Area", str(exc), parent=self.window)
            return
        self.window.destroy()
        self._on_created(area)


def run_app(template: MapTemplate | None = None, template_path: str | None = None) -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    app = VenueMapApp(template, template_path)
    app.run()
