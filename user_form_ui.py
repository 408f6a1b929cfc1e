# user_form_ui.py

import logging
from enum import Enum

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (QAbstractItemView, QApplication, QGridLayout, QHBoxLayout,
                             QHeaderView, QLabel, QLineEdit, QMessageBox, QPushButton,
                             QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget)

import db_ops
from db_ops import Status, User, is_valid_id

logger = logging.getLogger(__name__)

COLUMNS = ["ID", "Name", "Email"]

# Dialog shown for each failed store call: (title, text template, is_warning)
FAILURE_MESSAGES = {
    Status.NOT_FOUND: ("Not Found", "No user with ID {id} exists. The list has been refreshed.", True),
    Status.CONSTRAINT_VIOLATION: ("Duplicate Email", "A user with this email already exists.", False),
    Status.CONNECTION_ERROR: ("Database Error", "The database could not be reached. Details were written to the log.", False),
}


class FormState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class UserForm(QWidget):
    """Main window: edit fields, CRUD buttons and the list of stored users."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("User Management Application")
        self.setMinimumSize(600, 450)
        self.init_ui()
        self.load_users_into_table()

    def init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # --- Input fields ---
        input_grid = QGridLayout()
        input_grid.setHorizontalSpacing(5)
        input_grid.setVerticalSpacing(5)

        self.id_input = QLineEdit()
        self.id_input.setReadOnly(True)  # filled by selecting a row
        self.name_input = QLineEdit()
        self.email_input = QLineEdit()

        input_grid.addWidget(QLabel("ID (for Update/Delete):"), 0, 0)
        input_grid.addWidget(self.id_input, 0, 1)
        input_grid.addWidget(QLabel("Name:"), 1, 0)
        input_grid.addWidget(self.name_input, 1, 1)
        input_grid.addWidget(QLabel("Email:"), 2, 0)
        input_grid.addWidget(self.email_input, 2, 1)
        layout.addLayout(input_grid)

        # --- Buttons ---
        buttons = QHBoxLayout()
        buttons.addStretch()
        self.add_btn = QPushButton("Add User")
        self.update_btn = QPushButton("Update User")
        self.delete_btn = QPushButton("Delete User")
        self.refresh_btn = QPushButton("Refresh List")
        for btn in (self.add_btn, self.update_btn, self.delete_btn, self.refresh_btn):
            buttons.addWidget(btn)
        buttons.addStretch()
        layout.addLayout(buttons)

        self.add_btn.clicked.connect(self.add_user)
        self.update_btn.clicked.connect(self.update_user)
        self.delete_btn.clicked.connect(self.delete_user)
        self.refresh_btn.clicked.connect(self.refresh)

        # --- Users table ---
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.cellClicked.connect(self.on_row_clicked)
        layout.addWidget(self.table)

        self.status_label = QLabel()
        self.status_label.setObjectName("statusLabel")
        layout.addWidget(self.status_label)

    def center_on_screen(self):
        screen = QApplication.desktop().availableGeometry(self)
        frame = self.frameGeometry()
        frame.moveCenter(screen.center())
        self.move(frame.topLeft())

    # --- Form state ---
    @property
    def form_state(self):
        fields = (self.id_input, self.name_input, self.email_input)
        if any(field.text().strip() for field in fields):
            return FormState.POPULATED
        return FormState.EMPTY

    def clear_fields(self):
        self.id_input.clear()
        self.name_input.clear()
        self.email_input.clear()
        self.table.clearSelection()

    def on_row_clicked(self, row, column):
        """Copies the clicked row, as currently displayed, into the input fields."""
        if row < 0:
            return
        self.id_input.setText(self.table.item(row, 0).text())
        self.name_input.setText(self.table.item(row, 1).text())
        self.email_input.setText(self.table.item(row, 2).text())

    # --- CRUD actions ---
    def add_user(self):
        name = self.name_input.text().strip()
        email = self.email_input.text().strip()
        if not name or not email:
            self.show_input_error("Name and Email cannot be empty.")
            return

        new_user = User(name, email)
        result = db_ops.add_user(new_user)
        self.load_users_into_table()
        if result.ok:
            self.clear_fields()
            QMessageBox.information(self, "Success", f"User added successfully! (ID: {new_user.id})")
        else:
            self.show_failure(result, new_user.id)

    def update_user(self):
        user_id = self._read_id("update")
        if user_id is None:
            return
        name = self.name_input.text().strip()
        email = self.email_input.text().strip()
        if not name or not email:
            self.show_input_error("Name and Email cannot be empty for update.")
            return

        result = db_ops.update_user(User(name, email, id=user_id))
        self.load_users_into_table()
        if result.ok:
            self.clear_fields()
            QMessageBox.information(self, "Success", "User updated successfully!")
        else:
            self.show_failure(result, user_id)

    def delete_user(self):
        user_id = self._read_id("delete")
        if user_id is None:
            return

        confirm = QMessageBox.question(self, "Confirm Delete",
                                       f"Are you sure you want to delete user with ID {user_id}?",
                                       QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if confirm != QMessageBox.Yes:
            return

        result = db_ops.delete_user(user_id)
        self.load_users_into_table()
        if result.ok:
            self.clear_fields()
            QMessageBox.information(self, "Success", "User deleted successfully!")
        else:
            self.show_failure(result, user_id)

    def refresh(self):
        """Drops unsaved edits and reloads the list from the database."""
        self.clear_fields()
        self.load_users_into_table()

    def load_users_into_table(self):
        """Clears the table and re-populates it with the current rows from the database."""
        self.table.setRowCount(0)
        result = db_ops.fetch_all_users()
        for user in result.value:
            row = self.table.rowCount()
            self.table.insertRow(row)
            id_item = QTableWidgetItem(str(user.id))
            id_item.setTextAlignment(Qt.AlignCenter)
            self.table.setItem(row, 0, id_item)
            self.table.setItem(row, 1, QTableWidgetItem(user.name))
            self.table.setItem(row, 2, QTableWidgetItem(user.email))

        if result.ok:
            self.status_label.setText(f"{self.table.rowCount()} user(s) listed.")
        else:
            self.status_label.setText("Could not load users. See the log for details.")

    # --- Helpers ---
    def _read_id(self, action):
        """Parses the ID field; shows the matching input error and returns None when unusable."""
        text = self.id_input.text().strip()
        if not text:
            self.show_input_error(f"Please select a user from the table or enter an ID to {action}.")
            return None
        try:
            user_id = int(text)
        except ValueError:
            user_id = None
        if not is_valid_id(user_id):
            self.show_input_error("Invalid ID format. Please select from table or enter a number.")
            return None
        return user_id

    def show_input_error(self, text):
        QMessageBox.critical(self, "Input Error", text)

    def show_failure(self, result, user_id=None):
        title, template, is_warning = FAILURE_MESSAGES[result.status]
        text = template.format(id=user_id)
        logger.warning("%s: %s", title, result.message or text)
        if is_warning:
            QMessageBox.warning(self, title, text)
        else:
            QMessageBox.critical(self, title, text)
