from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, QRectF, QSettings, Qt, QTimer
from PySide6.QtGui import QColor, QFont, QPainter, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollBar,
    QVBoxLayout,
    QWidget,
)

from app.folio.config import load_settings
from app.folio.content.cards import CardKind
from app.folio.content.loader import load_content
from app.folio.stage import Stage
from app.folio.utils.imaging import read_image_size, resolve_image_path


# Scroll track height, in viewport heights, on top of the visible one.
SCROLL_VIEWPORTS = 4
RESIZE_DEBOUNCE_MS = 100
JUMP_DURATION_MS = 600

_KIND_COLORS = {
    CardKind.LEAD: QColor("#2f3640"),
    CardKind.BODY: QColor("#dcdde1"),
    CardKind.TRAIL: QColor("#2f3640"),
}


class StripCanvas(QWidget):
    """Paints the card strip for the stage's current scroll state.

    The strip is centred vertically; cards are drawn at their layout position
    shifted by the stage's translation, bookends scaled around their centre.
    """

    def __init__(self, stage: Stage, *, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.stage = stage
        self._pixmaps: dict[str, QPixmap] = {}
        self.setMinimumHeight(240)

    def set_pixmap(self, card_id: str, pixmap: QPixmap) -> None:
        if not pixmap.isNull():
            self._pixmaps[card_id] = pixmap

    def paintEvent(self, event) -> None:  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)
        p.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        p.fillRect(self.rect(), QColor("#f5f5f4"))

        layout = self.stage.layout
        top_offset = (self.height() - layout.content_height) / 2
        scale_image = self.stage.settings.animation.image_scale

        for index, (card, pos) in enumerate(zip(self.stage.cards, layout.positions)):
            t = self.stage.card_transform(index)
            if t.opacity <= 0:
                continue

            w = pos.width * t.scale
            h = pos.height * t.scale
            cx = pos.center_x + t.translate_x
            cy = top_offset + pos.top + pos.height / 2
            rect = QRectF(cx - w / 2, cy - h / 2, w, h)
            if rect.right() < 0 or rect.left() > self.width():
                continue

            p.save()
            p.setOpacity(t.opacity)
            p.setClipRect(rect)
            pixmap = self._pixmaps.get(card.id)
            if pixmap is not None:
                # Cover the card at image_scale, then shift by the parallax offset.
                cover = max(rect.width() / pixmap.width(), rect.height() / pixmap.height()) * scale_image
                iw, ih = pixmap.width() * cover, pixmap.height() * cover
                target = QRectF(
                    rect.center().x() - iw / 2 + t.parallax_x,
                    rect.center().y() - ih / 2 + t.parallax_y,
                    iw,
                    ih,
                )
                p.drawPixmap(target, pixmap, QRectF(pixmap.rect()))
            else:
                p.fillRect(rect, _KIND_COLORS[card.kind])

            p.setPen(QColor("#ffffff") if card.kind is not CardKind.BODY else QColor("#1e272e"))
            p.setFont(QFont(self.font().family(), 12))
            p.drawText(rect.adjusted(12, 12, -12, -12), Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignBottom, card.title or card.id)
            p.restore()


class FolioWindow(QMainWindow):
    def __init__(self, stage: Stage, *, title: str = "Folio") -> None:
        super().__init__()
        self.setWindowTitle(title)
        self.resize(1280, 720)
        self.stage = stage
        self.settings = QSettings("Folio", "FolioViewer")

        self._resize_timer = QTimer(self)
        self._resize_timer.setSingleShot(True)
        self._resize_timer.setInterval(RESIZE_DEBOUNCE_MS)
        self._resize_timer.timeout.connect(self._apply_viewport_width)

        self._jump_anim: QPropertyAnimation | None = None

        self._build_layout()
        self._restore_geometry()

    def _build_layout(self) -> None:
        root = QWidget()
        outer = QVBoxLayout(root)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        nav = QWidget()
        nav_layout = QHBoxLayout(nav)
        nav_layout.setContentsMargins(12, 8, 12, 8)
        self.nav_group = QButtonGroup(self)
        self.nav_group.setExclusive(True)
        self.nav_buttons: dict[str, QPushButton] = {}
        for category in self.stage.categories:
            btn = QPushButton(category)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _checked=False, c=category: self.jump_to(c))
            self.nav_group.addButton(btn)
            self.nav_buttons[category] = btn
            nav_layout.addWidget(btn)
        nav_layout.addStretch(1)
        self.phase_label = QLabel("")
        nav_layout.addWidget(self.phase_label)
        outer.addWidget(nav)

        body = QWidget()
        body_layout = QHBoxLayout(body)
        body_layout.setContentsMargins(0, 0, 0, 0)
        body_layout.setSpacing(0)
        self.canvas = StripCanvas(self.stage)
        self.scrollbar = QScrollBar(Qt.Orientation.Vertical)
        self.scrollbar.setRange(0, 1000)
        self.scrollbar.valueChanged.connect(self._on_scroll_value)
        body_layout.addWidget(self.canvas, 1)
        body_layout.addWidget(self.scrollbar)
        outer.addWidget(body, 1)

        self.setCentralWidget(root)
        self._sync_nav()

    def _restore_geometry(self) -> None:
        geometry = self.settings.value("ui/geometry")
        if geometry is not None:
            self.restoreGeometry(geometry)

    def load_images(self, base_dir: Path) -> None:
        for card in self.stage.cards:
            path = resolve_image_path(card.image, base_dir)
            if path is None:
                continue
            self.stage.set_image_size(card.id, read_image_size(path))
            self.canvas.set_pixmap(card.id, QPixmap(str(path)))
        self.canvas.update()

    # -- scroll / resize ------------------------------------------------------

    def scroll_range(self) -> int:
        return max(1, self.canvas.height() * SCROLL_VIEWPORTS)

    def _on_scroll_value(self, value: int) -> None:
        maximum = self.scrollbar.maximum()
        self.stage.set_progress(value / maximum if maximum > 0 else 0.0)
        self._sync_nav()
        self.canvas.update()

    def _sync_nav(self) -> None:
        btn = self.nav_buttons.get(self.stage.active_category)
        if btn is not None and not btn.isChecked():
            btn.setChecked(True)
        self.phase_label.setText(self.stage.phase.value.replace("_", " "))

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._resize_timer.start()

    def _apply_viewport_width(self) -> None:
        progress = self.stage.progress
        self.stage.set_viewport_width(self.canvas.width())
        # Keep the same progress on the resized track.
        self.scrollbar.blockSignals(True)
        self.scrollbar.setRange(0, self.scroll_range())
        self.scrollbar.setPageStep(max(1, self.canvas.height()))
        self.scrollbar.setValue(round(progress * self.scrollbar.maximum()))
        self.scrollbar.blockSignals(False)
        self._on_scroll_value(self.scrollbar.value())

    def wheelEvent(self, event) -> None:  # type: ignore[override]
        self.scrollbar.setValue(self.scrollbar.value() - event.angleDelta().y())
        event.accept()

    # -- navigation -----------------------------------------------------------

    def jump_to(self, category: str) -> int | None:
        """Smooth-scroll to ``category``; returns the target value or None."""
        offset = self.stage.jump_to_category(category, self.scrollbar.maximum())
        if offset is None:
            self._sync_nav()
            return None

        target = round(offset)
        if self._jump_anim is not None:
            self._jump_anim.stop()
        anim = QPropertyAnimation(self.scrollbar, b"value", self)
        anim.setDuration(JUMP_DURATION_MS)
        anim.setEasingCurve(QEasingCurve.Type.InOutCubic)
        anim.setStartValue(self.scrollbar.value())
        anim.setEndValue(target)
        anim.start()
        self._jump_anim = anim
        return target

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.settings.setValue("ui/geometry", self.saveGeometry())
        super().closeEvent(event)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Folio desktop viewer")
    parser.add_argument("content", help="Content JSON file")
    parser.add_argument("--config", default=None, help="Settings JSON with phase/animation overrides")
    args = parser.parse_args(argv)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setOrganizationName("Folio")
    app.setApplicationName("FolioViewer")

    try:
        content = load_content(args.content)
        settings = load_settings(args.config)
    except ValueError as e:
        QMessageBox.critical(None, "Folio", str(e))
        return 1

    stage = Stage(content.cards, content.categories, settings=settings)
    win = FolioWindow(stage, title=f"Folio - {Path(args.content).name}")
    win.load_images(Path(args.content).resolve().parent)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
