# main.py

import logging
import sys
import tkinter as tk

from matrix_rain.config_manager import DEFAULT_CONFIG, load_config
from matrix_rain.rain_desktop import MatrixRainDesktop


def configure_logging(level_name):
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_tk_root():
    """Hidden Tk root hosting the control panel, or None without a display for Tk."""
    try:
        tk_root = tk.Tk()
    except tk.TclError as e:
        logging.getLogger(__name__).warning("Tk unavailable, control panel disabled: %s", e)
        return None
    tk_root.withdraw()  # Hide the Tk root window
    return tk_root


def main():
    # Load application configuration at startup
    app_config = load_config(DEFAULT_CONFIG)
    configure_logging(app_config.get("log_level", "INFO"))

    tk_root = None
    try:
        # 1. Initialize the hidden Tkinter main loop
        tk_root = create_tk_root()

        # 2. Initialize the desktop host with configurations
        app = MatrixRainDesktop(
            width=app_config["width"],
            height=app_config["height"],
            fps=app_config["fps"],
            initial_config=app_config,
        )
        app.tk_root = tk_root

        # 3. Start the main application loop
        app.run()

    except Exception as e:
        print(f"Program startup failed or fatal error during runtime: {e}")
        sys.exit(1)

    finally:
        # Ensure tk_root is properly destroyed upon exit
        if tk_root is not None:
            try:
                tk_root.destroy()
            except tk.TclError:
                pass


if __name__ == "__main__":
    main()
