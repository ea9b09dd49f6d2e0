# settings_gui.py

import customtkinter as ctk

from matrix_rain.params import SPEED_RANGE, DENSITY_RANGE
from matrix_rain.themes import ColorTheme

# Set theme and appearance
ctk.set_appearance_mode("Dark")
ctk.set_default_color_theme("green")

PANEL_GREEN = "#4ade80"
PANEL_BORDER = "#14532d"
PANEL_BG = "#050a05"
BUTTON_BG = "#0f2a17"
BUTTON_HOVER = "#14532d"
MONO_FONT = ("Courier New", 12, "bold")
SLIDER_STEP = 0.1


def _steps(bounds):
    lo, hi = bounds
    return round((hi - lo) / SLIDER_STEP)


class ControlPanel(ctk.CTkToplevel):
    """
    Small floating window with live controls for the rain.

    Every widget only forwards a scalar to the desktop host through
    host.update_params(); the panel keeps no animation state of its own.
    """

    def __init__(self, master, host):
        super().__init__(master)
        self.host = host
        self.title("Matrix Rain")

        self.gui_width = 300
        self.collapsed_height = 64
        self.expanded_height = 330
        self.is_expanded = False

        self.resizable(False, False)
        self.attributes('-topmost', True)
        self.configure(fg_color=PANEL_BG)
        self.protocol("WM_DELETE_WINDOW", self.close_window)

        params = host.engine.params
        self.speed_var = ctk.DoubleVar(value=params.speed)
        self.density_var = ctk.DoubleVar(value=params.density)

        self.set_initial_position()
        self.create_widgets()
        self.refresh()

    def set_initial_position(self):
        """Pins the panel to the top-right corner of the screen."""
        self.update_idletasks()
        margin = 16
        start_x = self.winfo_screenwidth() - self.gui_width - margin
        height = self.expanded_height if self.is_expanded else self.collapsed_height
        self.wm_geometry(f"{self.gui_width}x{height}+{int(start_x)}+{margin}")

    def create_widgets(self):
        """Creates and places all UI elements (widgets) in the window."""
        self.main_frame = ctk.CTkFrame(self, fg_color=PANEL_BG, border_color=PANEL_BORDER, border_width=1)
        self.main_frame.pack(fill="both", expand=True, padx=6, pady=6)

        # --- Header: title and expand toggle ---
        header = ctk.CTkFrame(self.main_frame, fg_color="transparent")
        header.pack(fill="x", padx=10, pady=(10, 6))

        ctk.CTkLabel(header, text="⚡ MATRIX", text_color=PANEL_GREEN, font=MONO_FONT).pack(side="left")

        self.expand_button = ctk.CTkButton(
            header, text="⚙", width=32, height=28, command=self.toggle_expanded,
            fg_color="transparent", hover_color=BUTTON_HOVER, text_color=PANEL_GREEN,
        )
        self.expand_button.pack(side="right")

        # --- Body, only packed while expanded ---
        self.body = ctk.CTkFrame(self.main_frame, fg_color="transparent")

        # 1. Play / sound row
        row = ctk.CTkFrame(self.body, fg_color="transparent")
        row.pack(fill="x", pady=(0, 10))

        self.play_button = ctk.CTkButton(
            row, text="PAUSE", width=110, command=self.toggle_playing, font=MONO_FONT,
            fg_color=BUTTON_BG, hover_color=BUTTON_HOVER, text_color=PANEL_GREEN,
            border_color=PANEL_GREEN, border_width=1,
        )
        self.play_button.pack(side="left")

        self.sound_button = ctk.CTkButton(
            row, text="🔇", width=40, command=self.toggle_sound,
            fg_color=BUTTON_BG, hover_color=BUTTON_HOVER, text_color=PANEL_GREEN,
            border_color=PANEL_GREEN, border_width=1,
        )
        self.sound_button.pack(side="left", padx=(10, 0))

        # 2. Speed slider
        self.speed_label = self._add_slider("SPEED", self.speed_var, SPEED_RANGE, self.on_speed_change)

        # 3. Density slider
        self.density_label = self._add_slider("DENSITY", self.density_var, DENSITY_RANGE, self.on_density_change)

        # 4. Color swatches
        ctk.CTkLabel(self.body, text="COLOR", text_color=PANEL_GREEN, font=MONO_FONT).pack(anchor="w")
        swatches = ctk.CTkFrame(self.body, fg_color="transparent")
        swatches.pack(fill="x", pady=(4, 0))

        self.color_buttons = {}
        for theme in ColorTheme:
            button = ctk.CTkButton(
                swatches, text="", width=32, height=32, corner_radius=6,
                fg_color=theme.hex_value, hover_color=theme.hex_value,
                border_width=2, border_color=PANEL_BORDER,
                command=lambda t=theme: self.select_color(t),
            )
            button.pack(side="left", padx=(0, 8))
            self.color_buttons[theme] = button

    def _add_slider(self, title, variable, bounds, command):
        ctk.CTkLabel(self.body, text=title, text_color=PANEL_GREEN, font=MONO_FONT).pack(anchor="w")
        slider = ctk.CTkSlider(
            self.body, from_=bounds[0], to=bounds[1], number_of_steps=_steps(bounds),
            variable=variable, command=command,
            button_color=PANEL_GREEN, progress_color=PANEL_GREEN,
        )
        slider.pack(fill="x")
        label = ctk.CTkLabel(self.body, text="", text_color=PANEL_GREEN, font=MONO_FONT)
        label.pack(anchor="w", pady=(0, 8))
        return label

    # --- Widget callbacks ---

    def toggle_expanded(self):
        self.is_expanded = not self.is_expanded
        if self.is_expanded:
            self.body.pack(fill="both", expand=True, padx=10, pady=(0, 10))
        else:
            self.body.pack_forget()
        self.set_initial_position()

    def toggle_playing(self):
        self.host.update_params(playing=not self.host.engine.params.playing)

    def toggle_sound(self):
        self.host.update_params(sound_enabled=not self.host.engine.params.sound_enabled)

    def on_speed_change(self, value):
        # Slider steps accumulate float error; the readout shows one decimal anyway
        self.host.update_params(speed=round(float(value), 1))

    def on_density_change(self, value):
        self.host.update_params(density=round(float(value), 1))

    def select_color(self, theme):
        self.host.update_params(color=theme)

    def refresh(self):
        """Syncs every widget with the engine's current parameters."""
        params = self.host.engine.params
        self.play_button.configure(text="PAUSE" if params.playing else "PLAY")
        self.sound_button.configure(text="🔊" if params.sound_enabled else "🔇")
        self.speed_var.set(params.speed)
        self.density_var.set(params.density)
        self.speed_label.configure(text=f"{params.speed:.1f}x")
        self.density_label.configure(text=f"{params.density:.1f}x")
        for theme, button in self.color_buttons.items():
            button.configure(border_color=PANEL_GREEN if theme is params.color else PANEL_BORDER)

    def close_window(self):
        """Closes the panel; the host can reopen it at any time."""
        self.destroy()
        self.host.control_panel = None
