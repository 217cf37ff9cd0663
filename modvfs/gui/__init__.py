# ==============================================================================
# GUI MODULE INIT
# ==============================================================================
# PyQt6-based graphical user interface for ModVFS.
#
# Components:
#   - MainWindow: Primary application window (main_window.py)
#   - VFSBrowserWidget: Tree/list/preview browser (vfs_browser.py)
#   - formatting: Qt-free size, hex dump and file type helpers
#
# Qt is only imported by the widget modules, so the formatting helpers can be
# used without PyQt6 installed:
#   from modvfs.gui.main_window import MainWindow
# ==============================================================================
