"""
User interface for the SmartVault Password Manager.

DEMO NOTICE:
The PIN prompt guards actions against casual use only. See smartvault.gate.
"""

import logging
from typing import Optional, List
from PyQt5.QtWidgets import (
    QMainWindow, QDialog, QWidget, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QPushButton, QTableWidget, QTableWidgetItem,
    QMessageBox, QFileDialog, QTextEdit, QDialogButtonBox, QListWidget,
    QListWidgetItem, QAbstractItemView
)
from PyQt5.QtCore import Qt, pyqtSignal, QThread

from .ai import GeminiClient, QueryExpansion, PasswordAnalysis, expand_query, analyze_password
from .exceptions import SmartVaultError
from .history import visible_revisions
from .samples import sample_records
from .session import VaultSession, ViewMode
from .snapshot import export_records, import_records
from .storage import CredentialRecord, RecordInput
from .utils import format_timestamp
from . import config

logger = logging.getLogger(__name__)


class PasswordEntryDialog(QDialog):
    """Dialog for adding/editing password entries."""

    def __init__(self, record: Optional[CredentialRecord] = None, parent=None):
        super().__init__(parent)
        self.record = record
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Edit Password" if self.record else "Add New Password")
        self.setModal(True)
        self.setMinimumWidth(500)

        layout = QFormLayout()

        self.site_input = QLineEdit()
        self.site_input.setPlaceholderText("Site Name")
        layout.addRow("Site Name:", self.site_input)

        self.username_input = QLineEdit()
        self.username_input.setPlaceholderText("Username (ID)")
        layout.addRow("Username:", self.username_input)

        password_layout = QHBoxLayout()
        self.password_input = QLineEdit()
        self.password_input.setEchoMode(QLineEdit.Password)
        password_layout.addWidget(self.password_input)

        self.show_password_button = QPushButton("Show")
        self.show_password_button.setCheckable(True)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        password_layout.addWidget(self.show_password_button)
        layout.addRow("Password:", password_layout)

        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText("URL")
        layout.addRow("URL:", self.url_input)

        self.keyword_input = QLineEdit()
        self.keyword_input.setPlaceholderText("Keywords (comma-separated)")
        layout.addRow("Keywords:", self.keyword_input)

        self.memo_input = QTextEdit()
        self.memo_input.setMaximumHeight(100)
        layout.addRow("Memo:", self.memo_input)

        if self.record:
            self.site_input.setText(self.record.site_name)
            self.username_input.setText(self.record.username)
            self.password_input.setText(self.record.password)
            self.url_input.setText(self.record.url)
            self.keyword_input.setText(self.record.keyword)
            self.memo_input.setPlainText(self.record.memo)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Update" if self.record else "Register")
        buttons.accepted.connect(self.validate_and_accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

        self.setLayout(layout)

    def toggle_password_visibility(self, checked: bool):
        """Toggle password visibility."""
        if checked:
            self.password_input.setEchoMode(QLineEdit.Normal)
            self.show_password_button.setText("Hide")
        else:
            self.password_input.setEchoMode(QLineEdit.Password)
            self.show_password_button.setText("Show")

    def validate_and_accept(self):
        """Validate input and accept dialog."""
        if not self.site_input.text().strip():
            QMessageBox.warning(self, "Validation Error", "Site name is required")
            return

        if not self.username_input.text().strip():
            QMessageBox.warning(self, "Validation Error", "Username is required")
            return

        if not self.password_input.text():
            QMessageBox.warning(self, "Validation Error", "Password is required")
            return

        self.accept()

    def get_input(self) -> RecordInput:
        """Get the submitted field values."""
        return RecordInput(
            id=self.record.id if self.record else None,
            site_name=self.site_input.text().strip(),
            username=self.username_input.text().strip(),
            password=self.password_input.text(),
            url=self.url_input.text().strip(),
            memo=self.memo_input.toPlainText(),
            keyword=self.keyword_input.text().strip()
        )


class PinDialog(QDialog):
    """Asks for the unlock PIN; stays open after a wrong PIN so the user can retry."""

    def __init__(self, session: VaultSession, parent=None):
        super().__init__(parent)
        self.session = session
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(self.session.gate.title)
        self.setModal(True)
        self.setMinimumWidth(300)

        layout = QVBoxLayout()

        self.pin_input = QLineEdit()
        self.pin_input.setEchoMode(QLineEdit.Password)
        self.pin_input.setPlaceholderText(config.PIN_PLACEHOLDER)
        self.pin_input.setAlignment(Qt.AlignCenter)
        self.pin_input.returnPressed.connect(self.confirm)
        layout.addWidget(self.pin_input)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: red;")
        self.error_label.setAlignment(Qt.AlignCenter)
        self.error_label.setVisible(False)
        layout.addWidget(self.error_label)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.button(QDialogButtonBox.Ok).setText("Confirm")
        buttons.accepted.connect(self.confirm)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)
        self.pin_input.setFocus()

    def confirm(self):
        """Check the PIN; the gate runs the pending action on success."""
        if self.session.confirm_pin(self.pin_input.text()):
            self.accept()
            return
        self.error_label.setText(self.session.gate.error)
        self.error_label.setVisible(True)
        self.pin_input.clear()
        self.pin_input.setFocus()

    def reject(self):
        """Cancel clears the pending action."""
        self.session.cancel_pin()
        super().reject()


class RecordDetailsDialog(QDialog):
    """Read-only view of one record."""

    analyze_requested = pyqtSignal(str)

    def __init__(self, record: CredentialRecord, parent=None):
        super().__init__(parent)
        self.record = record
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(self.record.site_name)
        self.setModal(True)
        self.setMinimumWidth(450)

        layout = QFormLayout()

        def read_only(text: str) -> QLabel:
            label = QLabel(text)
            label.setTextInteractionFlags(Qt.TextSelectableByMouse)
            label.setWordWrap(True)
            return label

        layout.addRow("Username:", read_only(self.record.username))

        password_layout = QHBoxLayout()
        self.password_label = read_only(config.TABLE_PASSWORD_HIDDEN_TEXT)
        password_layout.addWidget(self.password_label)
        self.show_password_button = QPushButton("Show")
        self.show_password_button.setCheckable(True)
        self.show_password_button.toggled.connect(self.toggle_password_visibility)
        password_layout.addWidget(self.show_password_button)
        layout.addRow("Password:", password_layout)

        url_label = QLabel(f'<a href="{self.record.url}">{self.record.url}</a>' if self.record.url else "")
        url_label.setOpenExternalLinks(True)
        layout.addRow("URL:", url_label)
        layout.addRow("Memo:", read_only(self.record.memo))
        layout.addRow("Keywords:", read_only(self.record.keyword))
        layout.addRow("Registered:", read_only(format_timestamp(self.record.created_at)))

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        analyze_button = buttons.addButton("Analyze Strength", QDialogButtonBox.ActionRole)
        analyze_button.clicked.connect(lambda: self.analyze_requested.emit(self.record.password))
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

        self.setLayout(layout)

    def toggle_password_visibility(self, checked: bool):
        """Toggle password visibility."""
        if checked:
            self.password_label.setText(self.record.password)
            self.show_password_button.setText("Hide")
        else:
            self.password_label.setText(config.TABLE_PASSWORD_HIDDEN_TEXT)
            self.show_password_button.setText("Show")


class HistoryDialog(QDialog):
    """Revision history of one record, newest last."""

    def __init__(self, record: CredentialRecord, parent=None):
        super().__init__(parent)
        self.record = record
        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Revision History")
        self.setModal(True)
        self.setMinimumWidth(500)

        layout = QVBoxLayout()
        revisions = visible_revisions(self.record.history)

        if not revisions:
            layout.addWidget(QLabel(config.MSG_NO_HISTORY))
        else:
            history_list = QListWidget()
            history_list.setSelectionMode(QAbstractItemView.NoSelection)
            for entry in revisions:
                text = (
                    f"{format_timestamp(entry.updated_at)}\n"
                    f"  Before: Password: {entry.old_state.password}  Memo: {entry.old_state.memo}\n"
                    f"  After:  Password: {entry.new_state.password}  Memo: {entry.new_state.memo}"
                )
                history_list.addItem(QListWidgetItem(text))
            layout.addWidget(history_list)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        self.setLayout(layout)


class SmartSearchWorker(QThread):
    """Worker thread for AI query expansion."""

    finished = pyqtSignal(object)
    error = pyqtSignal(str)

    def __init__(self, term: str, client: GeminiClient):
        super().__init__()
        self.term = term
        self.client = client

    def run(self):
        """Run the expansion request."""
        try:
            self.finished.emit(expand_query(self.term, self.client))
        except Exception as e:
            logger.error(f"Smart search worker failed: {e}", exc_info=True)
            self.error.emit(str(e))


class PasswordAnalysisWorker(QThread):
    """Worker thread for AI password analysis."""

    finished = pyqtSignal(object)
    error = pyqtSignal(str)

    def __init__(self, password: str, client: GeminiClient):
        super().__init__()
        self.password = password
        self.client = client

    def run(self):
        """Run the analysis request."""
        try:
            self.finished.emit(analyze_password(self.password, self.client))
        except Exception as e:
            logger.error(f"Password analysis worker failed: {e}", exc_info=True)
            self.error.emit(str(e))


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, session: VaultSession):
        super().__init__()
        self.session = session
        self._workers: List[QThread] = []
        self.init_ui()
        self.load_entries()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle(config.APP_TITLE_PREFIX)
        self.setGeometry(100, 100, 1000, 600)

        self.create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout()
        central_widget.setLayout(layout)

        title_label = QLabel("Password Manager")
        font = title_label.font()
        font.setPointSize(16)
        font.setBold(True)
        title_label.setFont(font)
        title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(title_label)

        tagline_label = QLabel(config.APP_TAGLINE)
        tagline_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(tagline_label)

        # Toolbar
        toolbar_layout = QHBoxLayout()

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search passwords...")
        self.search_input.textChanged.connect(self.filter_entries)
        self.search_input.returnPressed.connect(self.smart_search)
        toolbar_layout.addWidget(self.search_input)

        self.smart_search_button = QPushButton("AI Smart Search")
        self.smart_search_button.clicked.connect(self.smart_search)
        toolbar_layout.addWidget(self.smart_search_button)

        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self.reset_search)
        toolbar_layout.addWidget(self.reset_button)

        self.add_button = QPushButton("Add Entry")
        self.add_button.clicked.connect(self.add_entry)
        toolbar_layout.addWidget(self.add_button)

        layout.addLayout(toolbar_layout)

        self.ai_message_label = QLabel("")
        self.ai_message_label.setAlignment(Qt.AlignCenter)
        self.ai_message_label.setWordWrap(True)
        self.ai_message_label.setVisible(False)
        layout.addWidget(self.ai_message_label)

        # Record table
        self.table = QTableWidget()
        self.table.setColumnCount(4)
        self.table.setHorizontalHeaderLabels(["Site", "Username", "Memo", "Actions"])
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setColumnWidth(0, 250)
        self.table.setColumnWidth(1, 200)
        self.table.setColumnWidth(2, 250)
        self.table.cellDoubleClicked.connect(self._handle_row_activated)
        layout.addWidget(self.table)

        self.empty_label = QLabel(config.MSG_NO_RECORDS)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setVisible(False)
        layout.addWidget(self.empty_label)

        self.count_label = QLabel("Total Passwords: 0")
        self.count_label.setStyleSheet("padding-right: 10px;")
        self.statusBar().addPermanentWidget(self.count_label)

    def create_menu_bar(self):
        """Create the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("File")

        export_action = file_menu.addAction("Export Snapshot...")
        export_action.triggered.connect(self.export_snapshot)

        import_action = file_menu.addAction("Import Snapshot...")
        import_action.triggered.connect(self.import_snapshot)

        samples_action = file_menu.addAction("Load Sample Data")
        samples_action.triggered.connect(self.load_sample_data)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("Exit")
        exit_action.triggered.connect(self.close)

    def load_entries(self):
        """Rebuild the table from the session's visible records."""
        self.table.setRowCount(0)
        records = self.session.visible_records()
        for record in records:
            self.add_entry_to_table(record)

        self.table.setVisible(bool(records))
        self.empty_label.setVisible(not records)
        self.count_label.setText(f"Total Passwords: {len(self.session.store)}")
        self.update_ai_message()

    def add_entry_to_table(self, record: CredentialRecord):
        """Add a record to the table."""
        row = self.table.rowCount()
        self.table.insertRow(row)

        site_item = QTableWidgetItem(record.site_name)
        site_item.setData(Qt.UserRole, record.id)
        self.table.setItem(row, 0, site_item)
        self.table.setItem(row, 1, QTableWidgetItem(record.username))

        memo = record.memo
        if len(memo) > config.MEMO_PREVIEW_LENGTH:
            memo = memo[:config.MEMO_PREVIEW_LENGTH] + "..."
        self.table.setItem(row, 2, QTableWidgetItem(memo))

        actions_widget = QWidget()
        actions_layout = QHBoxLayout()
        actions_layout.setContentsMargins(0, 0, 0, 0)

        history_btn = QPushButton("🕘")
        history_btn.setToolTip("History")
        history_btn.setMaximumWidth(30)
        history_btn.clicked.connect(lambda: self.view_history(record.id))
        actions_layout.addWidget(history_btn)

        edit_btn = QPushButton("✏️")
        edit_btn.setToolTip("Edit")
        edit_btn.setMaximumWidth(30)
        edit_btn.clicked.connect(lambda: self.edit_entry(record.id))
        actions_layout.addWidget(edit_btn)

        delete_btn = QPushButton("🗑️")
        delete_btn.setToolTip("Delete")
        delete_btn.setMaximumWidth(30)
        delete_btn.clicked.connect(lambda: self.delete_entry(record.id))
        actions_layout.addWidget(delete_btn)

        actions_widget.setLayout(actions_layout)
        self.table.setCellWidget(row, 3, actions_widget)

    def update_ai_message(self):
        message = self.session.status_message
        self.ai_message_label.setText(message)
        self.ai_message_label.setVisible(bool(message))

    def filter_entries(self, text: str):
        """Re-filter the table as the search text changes."""
        self.session.set_search_term(text)
        self.load_entries()

    def reset_search(self):
        self.session.reset_search()
        self._set_search_text("")
        self.load_entries()

    def _set_search_text(self, text: str):
        self.search_input.blockSignals(True)
        self.search_input.setText(text)
        self.search_input.blockSignals(False)

    # Gated actions

    def _handle_row_activated(self, row: int, column: int):
        item = self.table.item(row, 0)
        if item:
            self.view_details(item.data(Qt.UserRole))

    def _unlock(self) -> bool:
        """Show the PIN dialog for the pending action; True once it has run."""
        dialog = PinDialog(self.session, self)
        return bool(dialog.exec_())

    def edit_entry(self, record_id: str):
        """Edit an existing entry."""
        if not self.session.request_edit(record_id):
            return
        if not self._unlock() or self.session.mode is not ViewMode.EDITING:
            return

        dialog = PasswordEntryDialog(self.session.current_record, parent=self)
        if not dialog.exec_():
            self.session.close_view()
            return
        try:
            if self.session.submit_edit(dialog.get_input()):
                self.statusBar().showMessage("Entry updated", config.STATUS_FLASH_MS)
            else:
                QMessageBox.warning(self, "Not Found", "This entry no longer exists.")
        except SmartVaultError as e:
            QMessageBox.warning(self, "Validation Error", str(e))
        self.load_entries()

    def delete_entry(self, record_id: str):
        """Delete an entry."""
        self.session.request_delete(record_id)
        if self._unlock():
            self.load_entries()
            self.statusBar().showMessage("Entry deleted", config.STATUS_FLASH_MS)

    def view_details(self, record_id: str):
        self.session.request_view_details(record_id)
        if not self._unlock() or self.session.mode is not ViewMode.DETAILS:
            return
        dialog = RecordDetailsDialog(self.session.current_record, self)
        dialog.analyze_requested.connect(self.analyze_password)
        dialog.exec_()
        self.session.close_view()

    def view_history(self, record_id: str):
        self.session.request_view_history(record_id)
        if not self._unlock() or self.session.mode is not ViewMode.HISTORY:
            return
        HistoryDialog(self.session.current_record, self).exec_()
        self.session.close_view()

    def add_entry(self):
        """Add a new password entry."""
        dialog = PasswordEntryDialog(parent=self)
        if dialog.exec_():
            try:
                self.session.register(dialog.get_input())
            except SmartVaultError as e:
                QMessageBox.warning(self, "Error", str(e))
                return
            self.load_entries()
            self.statusBar().showMessage("Entry added", config.STATUS_FLASH_MS)

    # AI

    def _start_worker(self, worker: QThread):
        # Running QThreads must stay referenced.
        self._workers = [w for w in self._workers if w.isRunning()]
        self._workers.append(worker)
        worker.start()

    def smart_search(self):
        """Expand the search text into site names via the AI adapter."""
        if not self.session.begin_smart_search():
            self.update_ai_message()
            return
        self.update_ai_message()
        worker = SmartSearchWorker(self.session.search_term, self.session.client)
        worker.finished.connect(self._handle_smart_search_finished)
        worker.error.connect(self._handle_ai_error)
        self._start_worker(worker)

    def _handle_smart_search_finished(self, expansion: QueryExpansion):
        self.session.finish_smart_search(expansion)
        self._set_search_text(self.session.search_term)
        self.load_entries()

    def analyze_password(self, password: str):
        self.session.begin_password_analysis()
        self.update_ai_message()
        worker = PasswordAnalysisWorker(password, self.session.client)
        worker.finished.connect(self._handle_analysis_finished)
        worker.error.connect(self._handle_ai_error)
        self._start_worker(worker)

    def _handle_analysis_finished(self, analysis: PasswordAnalysis):
        self.session.finish_password_analysis(analysis)
        self.update_ai_message()

    def _handle_ai_error(self, error: str):
        self.session.status_message = f"AI request failed: {error}"
        self.update_ai_message()

    # Snapshot

    def export_snapshot(self):
        """Export all records to a JSON snapshot."""
        reply = QMessageBox.question(
            self, "Export Snapshot",
            "The snapshot stores passwords in plain text. Continue?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply != QMessageBox.Yes:
            return

        filename, _ = QFileDialog.getSaveFileName(
            self, "Export Snapshot", config.DEFAULT_SNAPSHOT_FILE, config.SNAPSHOT_FILE_FILTER
        )
        if not filename:
            return
        try:
            export_records(filename, self.session.store.records())
        except SmartVaultError as e:
            QMessageBox.critical(self, "Export Failed", str(e))
            return
        self.statusBar().showMessage(f"Exported {len(self.session.store)} entries", config.STATUS_FLASH_MS)

    def import_snapshot(self):
        """Replace the records with those from a JSON snapshot."""
        filename, _ = QFileDialog.getOpenFileName(
            self, "Import Snapshot", "", config.SNAPSHOT_FILE_FILTER
        )
        if not filename:
            return
        try:
            self.session.replace_records(import_records(filename))
        except SmartVaultError as e:
            QMessageBox.critical(self, "Import Failed", str(e))
            return
        self.load_entries()
        self.statusBar().showMessage(f"Imported {len(self.session.store)} entries", config.STATUS_FLASH_MS)

    def load_sample_data(self):
        reply = QMessageBox.question(
            self, "Load Sample Data",
            "Replace all entries with the sample data?",
            QMessageBox.Yes | QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            self.session.replace_records(sample_records())
            self.load_entries()

    def closeEvent(self, event):
        """Wait for running AI workers before closing."""
        for worker in list(self._workers):
            worker.wait()
        event.accept()
