# ==============================================================================
# VFS BROWSER WIDGET MODULE
# ==============================================================================
# PyQt6 widget for browsing the merged view of a VFSManager.
#
# Features:
#   - Tree view of virtual folders (children loaded on expand)
#   - File list for the selected folder, showing which container won
#   - Preview panel for the selected file (images, text, hex dump)
#   - Search bar filtering the current folder
#   - Mount folders and archives (with optional password) in priority order
#   - Extract files/folders of the merged view to disk
#
# Usage:
#   browser = VFSBrowserWidget()
#   browser.add_container("Data/Base.pak")
#   browser.add_container("Data/Mod1.pak")
# ==============================================================================

import io
import os
from typing import Optional

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLabel, QPushButton,
    QLineEdit, QFileDialog, QTreeWidget, QTreeWidgetItem, QListWidget,
    QListWidgetItem, QSplitter, QMessageBox, QMenu, QProgressDialog,
    QScrollArea, QInputDialog, QApplication
)
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPixmap, QAction, QFont

from PIL import Image
from PIL.ImageQt import ImageQt

from ..core.config import Config, get_config
from ..core.exceptions import VFSError
from ..core.manager import VFSManager
from ..core.paths import output_path_for
from .formatting import (
    format_size, format_hex_dump, decode_preview_text, is_image_path, is_text_path
)


# Item data for folders is the folder key ("" for root, else "a/b/")
PLACEHOLDER = None


class VFSBrowserWidget(QWidget):
    """
    Widget for browsing a layered virtual file system.

    Provides tree view, file list, preview, and extraction functionality.
    """

    file_selected = pyqtSignal(str)  # Emitted when a file is selected
    containers_changed = pyqtSignal()  # Emitted after a mount or reset

    def __init__(self, parent=None, config: Optional[Config] = None):
        super().__init__(parent)

        self.config = config or get_config()
        self.vfs = VFSManager(default_encoding=self.config.default_encoding,
                              debug=self.config.debug_mode)
        self.current_directory = ""
        self.mounted = []  # (path, password) in mount order

        self._setup_ui()
        self._build_tree()
        self._update_status()

    def _setup_ui(self):
        """Build the user interface."""
        main_layout = QVBoxLayout(self)

        # === TOP BAR: Mount and Search ===
        top_bar = QHBoxLayout()

        add_archive_btn = QPushButton("Add Archive...")
        add_archive_btn.clicked.connect(self._on_add_archive)
        top_bar.addWidget(add_archive_btn)

        add_folder_btn = QPushButton("Add Folder...")
        add_folder_btn.clicked.connect(self._on_add_folder)
        top_bar.addWidget(add_folder_btn)

        reset_btn = QPushButton("Unmount All")
        reset_btn.clicked.connect(self.reset)
        top_bar.addWidget(reset_btn)

        top_bar.addStretch()

        top_bar.addWidget(QLabel("Search:"))

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search files...")
        self.search_edit.textChanged.connect(self._on_search_changed)
        top_bar.addWidget(self.search_edit)

        main_layout.addLayout(top_bar)

        # === MAIN SPLITTER: Tree | File List | Preview ===
        main_splitter = QSplitter(Qt.Orientation.Horizontal)

        # === LEFT: Folder Tree ===
        tree_group = QGroupBox("Folders")
        tree_layout = QVBoxLayout(tree_group)

        self.tree = QTreeWidget()
        self.tree.setHeaderLabel("Virtual Folders")
        self.tree.itemSelectionChanged.connect(self._on_tree_selection_changed)
        self.tree.itemExpanded.connect(self._on_tree_item_expanded)
        self.tree.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.customContextMenuRequested.connect(self._on_tree_context_menu)
        tree_layout.addWidget(self.tree)

        main_splitter.addWidget(tree_group)

        # === MIDDLE: File List ===
        files_group = QGroupBox("Files")
        files_layout = QVBoxLayout(files_group)

        self.file_list = QListWidget()
        self.file_list.itemSelectionChanged.connect(self._on_file_selection_changed)
        self.file_list.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.file_list.customContextMenuRequested.connect(self._on_file_context_menu)
        files_layout.addWidget(self.file_list)

        main_splitter.addWidget(files_group)

        # === RIGHT: Preview ===
        preview_group = QGroupBox("Preview")
        preview_layout = QVBoxLayout(preview_group)

        self.preview_area = QScrollArea()
        self.preview_area.setWidgetResizable(True)
        self.preview_label = QLabel("No file selected")
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.preview_label.setMinimumSize(400, 300)
        self.preview_area.setWidget(self.preview_label)
        preview_layout.addWidget(self.preview_area)

        self.file_info = QLabel("")
        self.file_info.setWordWrap(True)
        self.file_info.setStyleSheet("font-family: monospace; font-size: 10pt;")
        preview_layout.addWidget(self.file_info)

        main_splitter.addWidget(preview_group)

        main_splitter.setSizes([300, 300, 500])
        main_layout.addWidget(main_splitter)

        # === BOTTOM: Status Bar ===
        status_bar = QHBoxLayout()

        self.status_label = QLabel("Nothing mounted")
        status_bar.addWidget(self.status_label)

        status_bar.addStretch()

        self.stats_label = QLabel("")
        status_bar.addWidget(self.stats_label)

        main_layout.addLayout(status_bar)

    # ==========================================================================
    # MOUNTING
    # ==========================================================================

    def add_container(self, path: str, password: Optional[str] = None) -> bool:
        """
        Mount a folder or archive on top of the current view.

        Args:
            path: Folder or archive path
            password: Optional obfuscation password

        Returns:
            True if mounted, False if mounting failed
        """
        try:
            self.vfs.add_root_container(path, password)
        except VFSError as e:
            QMessageBox.warning(self, "Mount Failed", str(e))
            return False

        self.mounted.append((path, password))
        self._build_tree()
        self._update_status()
        self.containers_changed.emit()
        return True

    def mount_profile(self, config: Config) -> int:
        """Mount every container of a config mount profile, in order."""
        mounted = 0
        for item in config.containers:
            if self.add_container(config.resolve_path(item['path']), item.get('password')):
                mounted += 1
        return mounted

    def reset(self):
        """Unmount everything and start with an empty view."""
        self.vfs.close()
        self.vfs = VFSManager(default_encoding=self.config.default_encoding,
                              debug=self.config.debug_mode)
        self.current_directory = ""
        self.mounted = []
        self.preview_label.clear()
        self.preview_label.setText("No file selected")
        self.file_info.setText("")
        self._build_tree()
        self._update_status()
        self.containers_changed.emit()

    def close_vfs(self):
        """Release open archives (call when the window closes)."""
        self.vfs.close()

    def _on_add_archive(self):
        """Handle Add Archive button click."""
        path, _ = QFileDialog.getOpenFileName(
            self, "Add Archive", "", "Packages (*.pak *.zip);;All Files (*.*)"
        )
        if not path:
            return

        password, ok = QInputDialog.getText(
            self, "Archive Password",
            "Obfuscation password (leave empty for a plain archive):",
            QLineEdit.EchoMode.Password
        )
        if not ok:
            return

        self.add_container(path, password or None)

    def _on_add_folder(self):
        """Handle Add Folder button click."""
        path = QFileDialog.getExistingDirectory(self, "Add Folder")
        if path:
            self.add_container(path)

    # ==========================================================================
    # FOLDER TREE
    # ==========================================================================

    def _build_tree(self):
        """Rebuild the tree with the root and its direct subfolders."""
        self.tree.clear()

        root_item = QTreeWidgetItem(self.tree.invisibleRootItem(), ["/"])
        root_item.setData(0, Qt.ItemDataRole.UserRole, "")
        self._load_tree_item_children(root_item, "")
        root_item.setExpanded(True)

    def _add_folder_item(self, parent: QTreeWidgetItem, folder: str):
        name = folder.rstrip('/').split('/')[-1]
        item = QTreeWidgetItem(parent, [name])
        item.setData(0, Qt.ItemDataRole.UserRole, folder)

        # Placeholder child makes it expandable until it is loaded
        if self.vfs.get_folders_in_folder(folder):
            placeholder = QTreeWidgetItem(item, ["..."])
            placeholder.setData(0, Qt.ItemDataRole.UserRole, PLACEHOLDER)

    def _on_tree_item_expanded(self, item: QTreeWidgetItem):
        """Handle tree item expansion (lazy loading)."""
        folder = item.data(0, Qt.ItemDataRole.UserRole)
        if folder is not PLACEHOLDER:
            self._load_tree_item_children(item, folder)

    def _load_tree_item_children(self, parent: QTreeWidgetItem, folder: str):
        """Replace a placeholder with the direct subfolders of a folder."""
        if parent.childCount() == 1 and parent.child(0).data(0, Qt.ItemDataRole.UserRole) is PLACEHOLDER:
            parent.removeChild(parent.child(0))
        elif parent.childCount() > 0:
            return  # Already loaded

        for subfolder in sorted(self.vfs.get_folders_in_folder(folder), key=str.lower):
            self._add_folder_item(parent, subfolder)

    def _on_tree_selection_changed(self):
        """Handle tree selection change."""
        selected = self.tree.selectedItems()
        if not selected:
            return

        folder = selected[0].data(0, Qt.ItemDataRole.UserRole)
        if folder is not PLACEHOLDER:
            self.current_directory = folder
            self._update_file_list()

    # ==========================================================================
    # FILE LIST
    # ==========================================================================

    def _update_file_list(self, search: str = ""):
        """Fill the file list with the current folder's files."""
        self.file_list.clear()

        search_lower = search.lower()
        files = self.vfs.get_files_in_folder(self.current_directory)

        for file_path in sorted(files, key=str.lower):
            name = file_path.split('/')[-1]
            if search_lower and search_lower not in name.lower():
                continue

            handle = self.vfs.get_file_info(file_path)
            size = getattr(handle, 'size', None)
            label = f"{name} ({format_size(size)})" if size is not None else name

            item = QListWidgetItem(label)
            item.setData(Qt.ItemDataRole.UserRole, file_path)
            item.setToolTip(handle.source if handle else file_path)
            self.file_list.addItem(item)

    def _on_search_changed(self, text: str):
        """Handle search text change."""
        self._update_file_list(text)

    def _on_file_selection_changed(self):
        """Handle file list selection change."""
        selected = self.file_list.selectedItems()
        if not selected:
            self.preview_label.setText("No file selected")
            self.file_info.setText("")
            return

        file_path = selected[0].data(Qt.ItemDataRole.UserRole)
        if file_path:
            self._preview_file(file_path)
            self.file_selected.emit(file_path)

    # ==========================================================================
    # PREVIEW
    # ==========================================================================

    def _read(self, file_path: str) -> Optional[bytes]:
        try:
            return self.vfs.get_file_contents(file_path)
        except (VFSError, OSError) as e:
            self.preview_label.setText(f"Failed to read file:\n{e}")
            self.file_info.setText("")
            return None

    def _show_info(self, file_path: str, data: bytes, extra: str = ""):
        handle = self.vfs.get_file_info(file_path)
        info_text = f"File: {file_path}\n"
        info_text += f"Size: {len(data):,} bytes\n"
        if handle:
            info_text += f"Source: {handle.source}\n"
        self.file_info.setText(info_text + extra)

    def _preview_file(self, file_path: str):
        """Preview a file based on its extension."""
        data = self._read(file_path)
        if data is None:
            return

        self.preview_label.clear()
        self._show_info(file_path, data)

        if is_image_path(file_path):
            self._preview_image(data)
        elif is_text_path(file_path):
            self._preview_text(data)
        else:
            self._preview_hex(data)

    def _preview_image(self, data: bytes):
        """Preview image file."""
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (OSError, Image.DecompressionBombError) as e:
            self.preview_label.setText(f"Image Preview Error: {e}")
            return
        self._display_image(img)

    def _display_image(self, img: Image.Image):
        """Display PIL Image in preview label."""
        if img.mode not in ('RGB', 'RGBA'):
            img = img.convert('RGBA')

        pixmap = QPixmap.fromImage(ImageQt(img))

        # Scale if too large
        max_size = 800
        if pixmap.width() > max_size or pixmap.height() > max_size:
            pixmap = pixmap.scaled(max_size, max_size, Qt.AspectRatioMode.KeepAspectRatio,
                                   Qt.TransformationMode.SmoothTransformation)

        self.preview_label.setPixmap(pixmap)
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

    def _preview_text(self, data: bytes):
        """Preview text file."""
        encodings = (self.config.default_encoding, 'latin-1')
        text = decode_preview_text(data, self.config.text_preview_limit, encodings)
        if text is None:
            self._preview_hex(data)
            return

        self.preview_label.setText(text)
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

    def _preview_hex(self, data: bytes):
        """Preview file as hex dump."""
        self.preview_label.setText(format_hex_dump(data, self.config.hex_preview_bytes))
        self.preview_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.preview_label.setFont(QFont("monospace"))

    def _view_hex_for_file(self, file_path: str):
        """Force hex view for a file."""
        data = self._read(file_path)
        if data is None:
            return
        self.preview_label.clear()
        self._preview_hex(data)
        self._show_info(file_path, data, "\n(Hex dump view)")

    # ==========================================================================
    # CONTEXT MENUS
    # ==========================================================================

    def _on_tree_context_menu(self, position):
        """Show context menu for tree."""
        item = self.tree.itemAt(position)
        if not item or item.data(0, Qt.ItemDataRole.UserRole) is PLACEHOLDER:
            return

        menu = QMenu(self)

        extract_action = QAction("Extract Folder", self)
        extract_action.triggered.connect(lambda: self._extract_folder(item))
        menu.addAction(extract_action)

        menu.exec(self.tree.mapToGlobal(position))

    def _on_file_context_menu(self, position):
        """Show context menu for file list."""
        item = self.file_list.itemAt(position)
        if not item:
            return

        file_path = item.data(Qt.ItemDataRole.UserRole)
        if not file_path:
            return

        menu = QMenu(self)

        extract_action = QAction("Extract Selected", self)
        extract_action.triggered.connect(lambda checked, fp=file_path: self._extract_file(fp))
        menu.addAction(extract_action)

        copy_path_action = QAction("Copy Path", self)
        copy_path_action.triggered.connect(lambda checked, fp=file_path: self._copy_path(fp))
        menu.addAction(copy_path_action)

        menu.addSeparator()
        view_hex_action = QAction("View Hex Dump", self)
        view_hex_action.triggered.connect(lambda checked, fp=file_path: self._view_hex_for_file(fp))
        menu.addAction(view_hex_action)

        menu.exec(self.file_list.mapToGlobal(position))

    # ==========================================================================
    # EXTRACTION
    # ==========================================================================

    def _write_file(self, output_dir: str, file_path: str):
        """Write one virtual file below output_dir, keeping its folders."""
        output_path = output_path_for(output_dir, file_path)
        os.makedirs(os.path.dirname(output_path), exist_ok=True)
        with open(output_path, 'wb') as f:
            f.write(self.vfs.get_file_contents(file_path))
        return output_path

    def _extract_file(self, file_path: str):
        """Extract selected file."""
        output_dir = QFileDialog.getExistingDirectory(self, "Select Output Directory")
        if not output_dir:
            return

        try:
            output_path = self._write_file(output_dir, file_path)
        except (VFSError, OSError) as e:
            QMessageBox.critical(self, "Error", f"Failed to extract file:\n{e}")
            return

        QMessageBox.information(self, "Success", f"Extracted to:\n{output_path}")

    def _extract_folder(self, item: QTreeWidgetItem):
        """Extract an entire folder of the merged view."""
        folder = item.data(0, Qt.ItemDataRole.UserRole)

        files_to_extract = self.vfs.get_files_in_folder(folder, recursive=True)
        if not files_to_extract:
            QMessageBox.information(self, "Info", "No files to extract")
            return

        output_dir = QFileDialog.getExistingDirectory(self, "Select Output Directory")
        if not output_dir:
            return

        progress = QProgressDialog(f"Extracting {len(files_to_extract)} files...", "Cancel",
                                   0, len(files_to_extract), self)
        progress.setWindowModality(Qt.WindowModality.WindowModal)

        extracted = 0
        for i, file_path in enumerate(files_to_extract):
            if progress.wasCanceled():
                break

            progress.setValue(i)
            progress.setLabelText(f"Extracting: {os.path.basename(file_path)}")

            try:
                self._write_file(output_dir, file_path)
                extracted += 1
            except (VFSError, OSError) as e:
                print(f"[ERROR] Failed to extract {file_path}: {e}")

        progress.setValue(len(files_to_extract))
        QMessageBox.information(self, "Complete", f"Extracted {extracted}/{len(files_to_extract)} files")

    def _copy_path(self, file_path: str):
        """Copy file path to clipboard."""
        QApplication.clipboard().setText(file_path)
        self.status_label.setText(f"Copied: {file_path}")

    # ==========================================================================
    # STATUS
    # ==========================================================================

    def _update_status(self):
        """Update status bar."""
        mounted = [os.path.basename(os.path.normpath(p)) for p in self.vfs.containers]
        if not mounted:
            self.status_label.setText("Nothing mounted")
        else:
            self.status_label.setText(f"Mount order: {' > '.join(mounted)}")

        stats = self.vfs.get_statistics()
        self.stats_label.setText(
            f"Files: {stats['total_files']:,} | Folders: {stats['total_folders']:,} | "
            f"Open archives: {stats['open_archives']}"
        )
