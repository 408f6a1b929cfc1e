import os
import sys
import tempfile


def redirect_pythonw_streams():
    """pythonw has no console: silence stdout and keep stderr in a per-script temp file."""
    if not sys.executable.endswith('pythonw.exe'):
        return
    sys.stdout = open(os.devnull, 'w')
    stderr_name = 'stderr-{}'.format(os.path.basename(sys.argv[0]))
    sys.stderr = open(os.path.join(tempfile.gettempdir(), stderr_name), 'w')


redirect_pythonw_streams()

# main.py
import logging
from PyQt5.QtWidgets import QApplication, QMessageBox

import db_ops
from stylesheet import STYLE_SHEET
from user_form_ui import UserForm

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging():
    """Applies the [logging] section of config.ini to the root logger."""
    level_name = db_ops.config.get('logging', 'level', fallback='INFO').upper()
    log_file = db_ops.config.get('logging', 'file', fallback='').strip()
    handlers = [logging.StreamHandler()]
    if log_file:
        log_file = db_ops.resolve_data_path(log_file)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO),
                        format=LOG_FORMAT, handlers=handlers)


def main():
    setup_logging()
    app = QApplication(sys.argv)
    app.setStyleSheet(STYLE_SHEET)

    schema = db_ops.create_table()
    if not schema.ok:
        QMessageBox.critical(None, "Database Error",
                             "Could not prepare the users table in {}.\n\n{}".format(
                                 db_ops.describe_target(), schema.message))
        return 1

    total = db_ops.count_users()
    if total.ok:
        logging.getLogger(__name__).info("%s user(s) in %s", total.value, db_ops.describe_target())

    form = UserForm()
    form.center_on_screen()
    form.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
