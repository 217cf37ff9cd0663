# ==============================================================================
# MAIN WINDOW MODULE
# ==============================================================================
# Main GUI window for ModVFS.
#
# Features:
#   - Browse the merged view of mounted folders and archives
#   - Mount the saved mount profile on startup
#   - Pack a folder into an archive (background worker)
#   - Save the current mount order as the mount profile
# ==============================================================================

import os
import sys
from datetime import datetime
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QLabel, QLineEdit,
    QProgressBar, QFileDialog, QMessageBox, QStatusBar, QToolBar, QInputDialog
)
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QAction

from .. import __version__
from ..core.config import Config, get_config
from ..core.exceptions import VFSError
from ..core.manager import VFSManager
from .vfs_browser import VFSBrowserWidget


# ==============================================================================
# PACK WORKER
# ==============================================================================
class PackWorker(QThread):
    """
    Background worker packing a folder into an archive.

    Signals:
        progress(int, int, str): current, total, virtual path
        completed(int): number of files packed
        error(str): error message
    """
    progress = pyqtSignal(int, int, str)
    completed = pyqtSignal(int)
    error = pyqtSignal(str)

    def __init__(self, source_dir: str, output_path: str, password: Optional[str] = None):
        super().__init__()
        self.source_dir = source_dir
        self.output_path = output_path
        self.password = password

    def run(self):
        """Execute the pack operation."""
        try:
            count = VFSManager.pack_folder(self.source_dir, self.output_path, self.password,
                                           progress_callback=self.progress.emit)
        except (VFSError, OSError) as e:
            self.error.emit(str(e))
            return
        self.completed.emit(count)


# ==============================================================================
# MAIN WINDOW
# ==============================================================================
class MainWindow(QMainWindow):
    """
    Main application window.

    Hosts the VFS browser plus toolbar actions for packing and for the
    mount profile.
    """

    def __init__(self, config: Optional[Config] = None):
        super().__init__()

        self.config = config or get_config()
        self.worker = None  # Background pack worker

        self._setup_window()
        self._setup_statusbar()
        self._setup_central()
        self._setup_toolbar()
        self._load_profile()

    # ==========================================================================
    # WINDOW SETUP
    # ==========================================================================

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle(f"ModVFS {__version__} - Layered Virtual File System")
        self.setMinimumSize(900, 600)
        self.resize(self.config.get('window_width', 1200), self.config.get('window_height', 800))

    def _setup_toolbar(self):
        """Create toolbar."""
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        pack = QAction("Pack Folder...", self)
        pack.setToolTip("Pack a folder into a mountable archive")
        pack.triggered.connect(self._on_pack_folder)
        toolbar.addAction(pack)

        toolbar.addSeparator()

        save_profile = QAction("Save Mount Profile", self)
        save_profile.setToolTip("Remember the current mount order")
        save_profile.triggered.connect(self._on_save_profile)
        toolbar.addAction(save_profile)

        reload_profile = QAction("Reload Mount Profile", self)
        reload_profile.triggered.connect(self._on_reload_profile)
        toolbar.addAction(reload_profile)

    def _setup_statusbar(self):
        """Create status bar."""
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)

        self.progress_bar = QProgressBar()
        self.progress_bar.setMaximumWidth(400)
        self.progress_bar.setVisible(False)
        self.statusbar.addPermanentWidget(self.progress_bar)

        self.status_label = QLabel("Ready - add a folder or archive to get started")
        self.statusbar.addWidget(self.status_label)

    def _setup_central(self):
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)

        self.browser = VFSBrowserWidget(self, config=self.config)
        self.browser.containers_changed.connect(self._on_containers_changed)
        layout.addWidget(self.browser)

    # ==========================================================================
    # MOUNT PROFILE
    # ==========================================================================

    def _load_profile(self):
        if not self.config.containers:
            return
        mounted = self.browser.mount_profile(self.config)
        self._log(f"Mounted {mounted}/{len(self.config.containers)} containers from profile")

    def _on_reload_profile(self):
        self.browser.reset()
        self._load_profile()

    def _on_save_profile(self):
        """Store the current mount order in the config."""
        self.config.data['containers'] = []
        for path, password in self.browser.mounted:
            self.config.add_container(path, password)

        if self.config.save():
            self._log(f"Saved mount profile ({len(self.browser.vfs.containers)} containers)")
            QMessageBox.information(self, "Saved", f"Mount profile saved to:\n{self.config.config_path}")
        else:
            QMessageBox.critical(self, "Error", f"Failed to save:\n{self.config.config_path}")

    def _on_containers_changed(self):
        count = len(self.browser.vfs.containers)
        self._log(f"{count} container(s) mounted")

    # ==========================================================================
    # PACKING
    # ==========================================================================

    def _on_pack_folder(self):
        """Ask for a folder and output file, then pack in the background."""
        if self.worker and self.worker.isRunning():
            QMessageBox.warning(self, "Busy", "A pack operation is already running!")
            return

        source_dir = QFileDialog.getExistingDirectory(self, "Folder to Pack")
        if not source_dir:
            return

        output_path, _ = QFileDialog.getSaveFileName(
            self, "Save Archive As", os.path.basename(source_dir) + ".pak",
            "Packages (*.pak *.zip);;All Files (*.*)"
        )
        if not output_path:
            return

        password, ok = QInputDialog.getText(
            self, "Obfuscation Password",
            "Password (leave empty for a plain archive):",
            QLineEdit.EchoMode.Password
        )
        if not ok:
            return

        self.worker = PackWorker(source_dir, output_path, password or None)
        self.worker.progress.connect(self._on_progress)
        self.worker.completed.connect(lambda count: self._on_pack_finished(count, output_path))
        self.worker.error.connect(self._on_pack_error)

        self.progress_bar.setVisible(True)
        self._log(f"Packing {source_dir} -> {output_path}")
        self.worker.start()

    def _on_progress(self, current: int, total: int, message: str):
        """Handle progress update."""
        self.progress_bar.setMaximum(total)
        self.progress_bar.setValue(current)
        self.status_label.setText(message)

    def _on_pack_finished(self, count: int, output_path: str):
        self.progress_bar.setVisible(False)
        self._log(f"Packed {count} files into {output_path}")
        QMessageBox.information(self, "Complete", f"Packed {count} files into:\n{output_path}")

    def _on_pack_error(self, error: str):
        self.progress_bar.setVisible(False)
        self._log(f"ERROR: {error}")
        QMessageBox.critical(self, "Error", error)

    # ==========================================================================
    # LOGGING / SHUTDOWN
    # ==========================================================================

    def _log(self, message: str):
        """Show a message in the status bar and on the console."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"[INFO] [{timestamp}] {message}")
        self.status_label.setText(message[:100])

    def closeEvent(self, event):
        if self.worker and self.worker.isRunning():
            self.worker.wait()

        self.browser.close_vfs()

        if self.config.get('remember_window_state', True):
            self.config['window_width'] = self.width()
            self.config['window_height'] = self.height()
            self.config.save()

        super().closeEvent(event)


# ==============================================================================
# ENTRY POINT
# ==============================================================================
def run_gui():
    """Run the ModVFS GUI."""
    app = QApplication(sys.argv)
    app.setApplicationName("ModVFS")
    app.setApplicationVersion(__version__)

    window = MainWindow()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(run_gui())
