# stylesheet.py

STYLE_SHEET = """
QWidget {
    font-family: "Segoe UI", "Helvetica Neue", Arial, sans-serif;
    font-size: 10pt;
    color: #222;
}

QLineEdit {
    padding: 4px 6px;
    border: 1px solid #b8c0cc;
    border-radius: 4px;
    background: #ffffff;
}

QLineEdit:read-only {
    background: #eef1f5;
    color: #555;
}

QLineEdit:focus {
    border: 1px solid #3d7bd9;
}

QPushButton {
    padding: 6px 14px;
    border: none;
    border-radius: 4px;
    background-color: #3d7bd9;
    color: #ffffff;
}

QPushButton:hover {
    background-color: #2f66b8;
}

QPushButton:pressed {
    background-color: #24508f;
}

QTableWidget {
    gridline-color: #d5dae1;
    selection-background-color: #cfe0fa;
    selection-color: #111;
}

QHeaderView::section {
    padding: 4px;
    border: none;
    border-bottom: 1px solid #b8c0cc;
    background-color: #f3f5f8;
    font-weight: bold;
}

QLabel#statusLabel {
    color: #666;
    font-size: 9pt;
}
"""
