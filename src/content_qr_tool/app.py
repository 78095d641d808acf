"""PyQt5 user interface for the Content QR Tool."""
from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from PyQt5.QtCore import QObject, QThread, Qt, pyqtSignal
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTabWidget,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from .config import AppConfig, StyleConfig
from .content import ContentKind, ContentModel, ErrorCorrection, RenderSettings, WifiSecurity
from .export import export_filename
from .icon import create_icon
from .qr import QRCodeManager, RenderError, RenderedImage
from .render import RenderOrchestrator, RenderRequest
from .state import AppState

logger = logging.getLogger(__name__)

_TABS: Tuple[Tuple[ContentKind, str], ...] = (
    (ContentKind.TEXT, "Text"),
    (ContentKind.URL, "URL"),
    (ContentKind.EMAIL, "Email"),
    (ContentKind.PHONE, "Phone"),
    (ContentKind.SMS, "SMS"),
    (ContentKind.WIFI, "Wi-Fi"),
    (ContentKind.LOCATION, "Location"),
    (ContentKind.VCARD, "Contact"),
)

_SECURITY_CHOICES = (
    (WifiSecurity.WPA, "WPA/WPA2"),
    (WifiSecurity.WEP, "WEP"),
    (WifiSecurity.NO_PASSWORD, "No Password"),
)

_ERROR_CHOICES = (
    (ErrorCorrection.L, "Low"),
    (ErrorCorrection.M, "Medium"),
    (ErrorCorrection.Q, "Quartile"),
    (ErrorCorrection.H, "High"),
)


class RenderWorker(QObject):  # pragma: no cover - requires Qt event loop
    finished = pyqtSignal(object, object)
    error = pyqtSignal(object, object)

    def __init__(self, manager: QRCodeManager, request: RenderRequest):
        super().__init__()
        self._manager = manager
        self._request = request

    def run(self) -> None:
        request = self._request
        try:
            image = self._manager.render(request.payload, request.error_correction, request.size)
        except Exception as exc:
            self.error.emit(request, exc)
        else:
            self.finished.emit(request, image)


class MainWindow(QWidget):  # pragma: no cover - requires Qt event loop
    def __init__(self, config: AppConfig, state: AppState, style: StyleConfig):
        super().__init__()
        self._config = config
        self._state = state
        self._style = style

        self._qr = QRCodeManager(config)
        self._state.qr_available = self._qr.is_available()
        self._model = ContentModel(
            settings=RenderSettings(
                error_correction=ErrorCorrection(config.qr_error_correction),
                size=config.qr_size,
            )
        )
        self._orchestrator = RenderOrchestrator(
            self._model,
            self._qr,
            state=state,
            dispatch=self._start_render,
            listener=self._on_render_updated,
        )
        self._jobs: List[Tuple[QThread, RenderWorker]] = []

        self._setup_ui()
        self._update_preview()

    # -- layout ---------------------------------------------------------

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)

        input_panel = QWidget()
        input_panel.setObjectName("CentralPanel")
        input_layout = QVBoxLayout(input_panel)

        header = QLabel("QR Code Content")
        header.setObjectName("HeaderLabel")
        subtitle = QLabel("Choose the type of content and fill in the details")
        subtitle.setObjectName("SubtleLabel")

        self._tabs = QTabWidget()
        builders = {
            ContentKind.TEXT: self._create_text_tab,
            ContentKind.URL: self._create_url_tab,
            ContentKind.EMAIL: self._create_email_tab,
            ContentKind.PHONE: self._create_phone_tab,
            ContentKind.SMS: self._create_sms_tab,
            ContentKind.WIFI: self._create_wifi_tab,
            ContentKind.LOCATION: self._create_location_tab,
            ContentKind.VCARD: self._create_vcard_tab,
        }
        for kind, title in _TABS:
            self._tabs.addTab(builders[kind](), title)
        self._tabs.currentChanged.connect(self._on_tab_changed)

        input_layout.addWidget(header)
        input_layout.addWidget(subtitle)
        input_layout.addWidget(self._tabs)
        input_layout.addWidget(self._create_settings_group())
        input_layout.addStretch()

        self._preview_panel = self._create_preview_panel()

        layout.addWidget(input_panel, 1)
        layout.addWidget(self._preview_panel, 1)

    def _line_edit(self, apply: Callable[[str], None], placeholder: str) -> QLineEdit:
        edit = QLineEdit()
        edit.setPlaceholderText(placeholder)
        edit.textChanged.connect(apply)
        return edit

    def _text_edit(self, apply: Callable[[str], None], placeholder: str, rows: int) -> QTextEdit:
        edit = QTextEdit()
        edit.setPlaceholderText(placeholder)
        edit.setAcceptRichText(False)
        edit.setFixedHeight(rows * 24 + 16)
        edit.textChanged.connect(lambda: apply(edit.toPlainText()))
        return edit

    def _flat(self, name: str) -> Callable[[str], None]:
        return lambda value: self._model.update(name, value)

    def _nested(self, section: str, name: str) -> Callable[[object], None]:
        return lambda value: self._model.update_nested(section, name, value)

    def _form_tab(self, rows: List[Tuple[str, QWidget]]) -> QWidget:
        tab = QWidget()
        form = QFormLayout(tab)
        for label, widget in rows:
            form.addRow(label, widget)
        return tab

    def _create_text_tab(self) -> QWidget:
        return self._form_tab(
            [("Text Content", self._text_edit(self._flat("text"), "Enter your text here...", 4))]
        )

    def _create_url_tab(self) -> QWidget:
        return self._form_tab(
            [("Website URL", self._line_edit(self._flat("url"), "example.com or https://example.com"))]
        )

    def _create_email_tab(self) -> QWidget:
        return self._form_tab(
            [
                ("Email Address", self._line_edit(self._nested("email", "to"), "recipient@example.com")),
                ("Subject", self._line_edit(self._nested("email", "subject"), "Email subject")),
                ("Message", self._text_edit(self._nested("email", "body"), "Email message", 3)),
            ]
        )

    def _create_phone_tab(self) -> QWidget:
        return self._form_tab(
            [("Phone Number", self._line_edit(self._flat("phone"), "+1234567890"))]
        )

    def _create_sms_tab(self) -> QWidget:
        return self._form_tab(
            [
                ("Phone Number", self._line_edit(self._nested("sms", "number"), "+1234567890")),
                ("Message", self._text_edit(self._nested("sms", "message"), "SMS message", 3)),
            ]
        )

    def _create_wifi_tab(self) -> QWidget:
        password = self._line_edit(self._nested("wifi", "password"), "WiFi password")
        password.setEchoMode(QLineEdit.Password)

        security = QComboBox()
        for value, label in _SECURITY_CHOICES:
            security.addItem(label, value)
        security.currentIndexChanged.connect(
            lambda index: self._model.update_nested("wifi", "security", security.itemData(index))
        )

        hidden = QCheckBox("Hidden network")
        hidden.toggled.connect(self._nested("wifi", "hidden"))

        return self._form_tab(
            [
                ("Network Name (SSID)", self._line_edit(self._nested("wifi", "ssid"), "MyWiFiNetwork")),
                ("Password", password),
                ("Security Type", security),
                ("", hidden),
            ]
        )

    def _create_location_tab(self) -> QWidget:
        return self._form_tab(
            [
                ("Latitude", self._line_edit(self._nested("location", "latitude"), "40.7128")),
                ("Longitude", self._line_edit(self._nested("location", "longitude"), "-74.0060")),
            ]
        )

    def _create_vcard_tab(self) -> QWidget:
        return self._form_tab(
            [
                ("First Name", self._line_edit(self._nested("vcard", "first_name"), "John")),
                ("Last Name", self._line_edit(self._nested("vcard", "last_name"), "Doe")),
                ("Organization", self._line_edit(self._nested("vcard", "organization"), "Company Name")),
                ("Phone", self._line_edit(self._nested("vcard", "phone"), "+1234567890")),
                ("Email", self._line_edit(self._nested("vcard", "email"), "john@example.com")),
                ("Website", self._line_edit(self._nested("vcard", "url"), "https://example.com")),
            ]
        )

    def _create_settings_group(self) -> QGroupBox:
        group = QGroupBox("QR Code Settings")
        form = QFormLayout()

        self._error_selector = QComboBox()
        for level, label in _ERROR_CHOICES:
            self._error_selector.addItem(f"{label} ({level.recovery:.0%})", level)
        index = self._error_selector.findData(self._model.settings.error_correction)
        if index >= 0:
            self._error_selector.setCurrentIndex(index)
        self._error_selector.currentIndexChanged.connect(
            lambda i: self._model.set_error_correction(self._error_selector.itemData(i))
        )

        self._size_selector = QComboBox()
        for size in self._config.qr_size_choices:
            self._size_selector.addItem(f"{size}x{size}", size)
        index = self._size_selector.findData(self._model.settings.size)
        if index >= 0:
            self._size_selector.setCurrentIndex(index)
        self._size_selector.currentIndexChanged.connect(
            lambda i: self._model.set_size(self._size_selector.itemData(i))
        )

        form.addRow("Error Correction", self._error_selector)
        form.addRow("Size (pixels)", self._size_selector)
        group.setLayout(form)
        return group

    def _create_preview_panel(self) -> QWidget:
        panel = QWidget()
        panel.setObjectName("CentralPanel")
        layout = QVBoxLayout(panel)

        header = QLabel("Generated QR Code")
        header.setObjectName("HeaderLabel")
        subtitle = QLabel("Scan with your device or download the image")
        subtitle.setObjectName("SubtleLabel")

        self._qr_preview = QLabel("QR code will appear here")
        self._qr_preview.setObjectName("qrDisplayLabel")
        self._qr_preview.setAlignment(Qt.AlignCenter)
        self._qr_preview.setMinimumSize(256, 256)

        self._render_status = QLabel()
        self._render_status.setObjectName("WarningLabel")
        self._render_status.setWordWrap(True)
        self._render_status.hide()

        self._download_btn = QPushButton("Download QR Code")
        self._download_btn.setObjectName("AccentButton")
        self._download_btn.clicked.connect(self._download)

        self._payload_preview = QTextEdit()
        self._payload_preview.setReadOnly(True)
        self._payload_preview.setMaximumHeight(120)
        self._payload_preview.setFont(QFont(self._style.font_mono, 10))

        layout.addWidget(header)
        layout.addWidget(subtitle)
        layout.addWidget(self._qr_preview)
        layout.addWidget(self._render_status)
        layout.addWidget(self._download_btn)
        layout.addWidget(QLabel("Preview Data:"))
        layout.addWidget(self._payload_preview)
        layout.addStretch()

        if not self._state.qr_available:
            self._qr_preview.setText("Install 'segno' for QR support: pip install segno")

        return panel

    # -- model and render callbacks ------------------------------------

    def _on_tab_changed(self, index: int) -> None:
        self._model.select(_TABS[index][0])

    def _start_render(self, request: RenderRequest) -> None:
        self._update_preview()
        if not self._state.qr_available:
            return

        thread = QThread()
        worker = RenderWorker(self._qr, request)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(self._on_render_finished)
        worker.error.connect(self._on_render_error)
        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        thread.finished.connect(lambda: self._forget_job(thread))
        thread.finished.connect(thread.deleteLater)

        self._jobs.append((thread, worker))
        thread.start()

    def _forget_job(self, thread: QThread) -> None:
        self._jobs = [job for job in self._jobs if job[0] is not thread]

    def _on_render_finished(self, request: RenderRequest, image: RenderedImage) -> None:
        self._orchestrator.deliver(request, image)

    def _on_render_error(self, request: RenderRequest, error: Exception) -> None:
        self._orchestrator.fail(request, error)

    def _on_render_updated(self, _orchestrator: RenderOrchestrator) -> None:
        self._update_preview()

    def _update_preview(self) -> None:
        orchestrator = self._orchestrator
        self._preview_panel.setVisible(orchestrator.ready)
        self._payload_preview.setPlainText(orchestrator.payload)
        self._download_btn.setVisible(orchestrator.can_export)

        error = orchestrator.error
        self._render_status.setText(error or "")
        self._render_status.setVisible(bool(error))

        image = orchestrator.image
        if image is None:
            self._qr_preview.clear()
            return

        try:
            pixmap = self._qr.to_qpixmap(image)
        except RenderError as exc:
            self._qr_preview.setText(f"QR preview failed: {exc}")
            return

        scaled = pixmap.scaled(self._qr_preview.size(), Qt.KeepAspectRatio, Qt.FastTransformation)
        self._qr_preview.setPixmap(scaled)

    def _download(self) -> None:
        if not self._orchestrator.can_export:
            QMessageBox.warning(self, "Error", "No QR code to save")
            return

        default_name = export_filename(self._model.kind, self._config.export_prefix)
        path, _ = QFileDialog.getSaveFileName(self, "Save QR Code", default_name, "PNG Images (*.png)")
        if not path:
            return

        try:
            self._orchestrator.export(path)
        except (RenderError, OSError) as exc:
            QMessageBox.critical(self, "Error", f"Save failed: {exc}")
        else:
            QMessageBox.information(self, "Success", "QR code saved successfully")

    def stop_rendering(self) -> None:
        for thread, _worker in list(self._jobs):
            if thread.isRunning():
                thread.quit()
                if not thread.wait(2000):
                    thread.terminate()
                    thread.wait()
        self._jobs = []


class ContentQRApp(QMainWindow):  # pragma: no cover - requires Qt event loop
    def __init__(self, config: AppConfig | None = None) -> None:
        super().__init__()

        self._config = config if config is not None else AppConfig()
        self._style = StyleConfig()
        self._state = AppState()
        self._main_window: MainWindow | None = None

        self._setup_ui()

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"{self._config.app_name} v{self._config.app_version}")
        self.setGeometry(100, 100, 1100, 750)
        self.setMinimumSize(700, 600)

        try:
            self.setWindowIcon(create_icon())
        except RuntimeError as exc:
            logger.debug("Window icon unavailable: %s", exc)

        self._apply_stylesheet()

        self._main_window = MainWindow(self._config, self._state, self._style)
        self.setCentralWidget(self._main_window)

        self.show()

    def _apply_stylesheet(self) -> None:
        style = self._style
        self.setStyleSheet(
            f"""
            QMainWindow {{ background: {style.bg_primary}; }}
            QWidget {{ color: {style.fg_primary}; font-family: {style.font_family}; font-size: {style.font_size}px; }}
            QTabWidget::pane {{ border: none; }}
            QTabBar::tab {{ background: {style.bg_secondary}; padding: 10px 14px; border: 1px solid {style.border}; border-bottom: none; border-top-left-radius: 5px; border-top-right-radius: 5px; }}
            QTabBar::tab:selected {{ background: {style.fg_secondary}; color: {style.bg_primary}; }}
            QGroupBox {{ font-weight: bold; border: 1px solid {style.border}; border-radius: 8px; margin-top: 1ex; padding: 15px; background: {style.bg_secondary}; }}
            QLineEdit, QTextEdit, QComboBox {{ background: {style.bg_primary}; color: {style.fg_secondary}; border: 1px solid {style.border}; border-radius: 4px; padding: 8px; }}
            QLineEdit:focus, QTextEdit:focus {{ border: 1px solid {style.accent_primary}; }}
            QPushButton {{ background: {style.accent_secondary}; color: {style.fg_secondary}; border: none; padding: 12px 18px; border-radius: 4px; font-weight: bold; }}
            QPushButton#AccentButton {{ background: {style.accent_primary}; color: {style.bg_primary}; }}
            #HeaderLabel {{ font-size: 22px; font-weight: bold; color: {style.fg_secondary}; }}
            #SubtleLabel {{ color: {style.fg_primary}; }}
            #WarningLabel {{ background: {style.warning}; color: {style.bg_primary}; padding: 8px; border-radius: 4px; }}
            #CentralPanel {{ background: {style.bg_tertiary}; border-radius: 8px; padding: 20px; }}
            #qrDisplayLabel {{ border: 2px solid {style.border}; background: #ffffff; border-radius: 8px; }}
            """
        )

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if self._main_window:
            self._main_window.stop_rendering()
        self._state.clear_image()
        event.accept()


def run(config: AppConfig | None = None) -> int:  # pragma: no cover - requires Qt event loop
    app = QApplication.instance() or QApplication([])
    app.setApplicationName("Content QR Tool")
    window = ContentQRApp(config)
    return app.exec_()


__all__ = ["run", "ContentQRApp"]
