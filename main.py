# ==============================================================================
# MODVFS - MAIN ENTRY POINT
# ==============================================================================
# This is the main entry point for the ModVFS application.
# It can be run in either GUI mode (default) or CLI mode.
#
# Usage:
#   python main.py              # Launch the VFS browser
#   python main.py --cli list   # Run a CLI command
#   python main.py --help       # Show help
# ==============================================================================

import sys
import traceback

from modvfs import __version__, __description__


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

def check_dependencies():
    """
    Check if the GUI dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    # Import name -> package name
    gui_deps = {'PyQt6': 'PyQt6', 'PIL': 'Pillow'}

    for module, package in gui_deps.items():
        try:
            __import__(module)
        except ImportError:
            missing.append(package)

    return (len(missing) == 0, missing)


# ==============================================================================
# MODE LAUNCHERS
# ==============================================================================

def run_gui():
    """
    Launch the graphical user interface.

    Returns:
        Exit code (0 for success)
    """
    try:
        print("[INFO] Loading PyQt6...")
        from PyQt6.QtWidgets import QApplication

        print("[INFO] Loading GUI modules...")
        from modvfs.gui.main_window import MainWindow

        print("[INFO] Creating application...")
        app = QApplication(sys.argv)
        app.setApplicationName("ModVFS")
        app.setApplicationVersion(__version__)
        app.setOrganizationName("ModVFS")

        print("[INFO] Creating main window...")
        window = MainWindow()
        window.show()

        print("[INFO] Starting event loop...")
        return app.exec()

    except ImportError as e:
        print(f"\n[ERROR] Import failed: {e}")
        print(f"\nPyQt6 and Pillow are required for GUI mode.")
        print(f"Install with: pip install PyQt6 Pillow")
        print(f"\nOr use CLI mode: python main.py --cli --help")
        return 1


def run_cli(argv):
    """
    Launch the command-line interface.

    Args:
        argv: Arguments for the CLI parser (without --cli)

    Returns:
        Exit code (0 for success)
    """
    from modvfs.cli import main as cli_main
    return cli_main(argv)


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main(argv=None):
    """
    Main entry point for ModVFS.

    Parses command-line arguments and launches either GUI or CLI mode.
    """
    argv = list(sys.argv[1:] if argv is None else argv)

    # Everything after --cli belongs to the CLI parser
    if '--cli' in argv:
        argv.remove('--cli')
        return run_cli(argv)

    if '--version' in argv or '-v' in argv:
        print(f"ModVFS v{__version__}")
        print(__description__)
        return 0

    if '--check' in argv:
        print("Checking dependencies...")
        print(f"  Python: {sys.version}")

        all_ok, missing = check_dependencies()

        if all_ok:
            print("[OK] All GUI dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")

        return 0 if all_ok else 1

    if '--help' in argv or '-h' in argv:
        print(f"\nModVFS v{__version__} - {__description__}")
        print("\nUsage: python main.py [options]")
        print("\nOptions:")
        print("  --cli        Run in command-line mode instead of GUI")
        print("  --help, -h   Show this help message")
        print("  --version    Show version information")
        print("  --check      Check dependencies and exit")
        print("\nCLI Commands (use with --cli):")
        print("  list         List files or folders of the merged view")
        print("  cat          Print a virtual file as text")
        print("  extract      Write the merged view to disk")
        print("  pack         Pack a folder into a mountable archive")
        print("  info         Show mounted containers and statistics")
        print("  bench        Measure read throughput")
        print("  profile      Manage the saved mount profile")
        return 0

    all_ok, missing = check_dependencies()
    if not all_ok:
        print(f"[ERROR] Missing required packages: {', '.join(missing)}")
        print("Use --cli for command-line mode")
        return 1

    print("Starting GUI...")
    try:
        return run_gui()
    except Exception as e:
        print(f"\n[FATAL ERROR] {e}")
        traceback.print_exc()
        return 1


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
