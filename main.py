# Main.py
""""" Entry point for the Pocket Calculator.

   Responsibilities:
   - Detect run mode (script vs PyInstaller.exe)
   - Verify required files exist in development mode
   - Load configuration and start the Qt GUI, or the console harness with --console

"""""
import sys
from pathlib import Path

from calculator import config_manager as config_manager
from calculator import error as E
from calculator import KeyboardMapping as KeyboardMapping
from calculator.CalculatorEngine import CalculatorEngine
from calculator.DisplayFormatter import format_display


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.

      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    package_dir = PROJECT_ROOT / "calculator"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "CalculatorEngine.py",
        package_dir / "DisplayFormatter.py",
        package_dir / "KeyboardMapping.py",
        package_dir / "config_manager.py",
        package_dir / "error.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def run_console(lines, output=print):
    """
    Line-oriented harness: every whitespace-separated token is a key name
    ("7", "+", "Enter", "Backspace", "Clear", "+/-", ...). The formatted
    display is printed after each line. 'quit' stops.
    """
    engine = CalculatorEngine()

    for line in lines:
        tokens = line.split()
        if tokens == ["quit"]:
            break
        for token in tokens:
            if not KeyboardMapping.dispatch_key(engine, token):
                output(E.ERROR_MESSAGES["4001"] + token)
        output(format_display(engine.display_value))

    return engine


def main():

    """
    Load configuration and start the GUI.
    - Keep this thin: no business logic here.
    """

    all_settings = config_manager.load_setting_value("all")
    print("Config loaded:", all_settings)

    if "--console" in sys.argv[1:]:
        run_console(sys.stdin)
        return

    # Imported here so the console harness runs without a display
    from calculator import UI as UI

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        print("Developer Mode: Checking file paths...")
        check_files_exist()
    else:
        print("Production mode (.exe) is starting...")
    main()
