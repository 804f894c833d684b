"""Delegate drawing the dimmed description text after each tree row label."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QStyle, QStyledItemDelegate, QStyleOptionViewItem

from .tree_model import DESCRIPTION_ROLE

_DESCRIPTION_COLOR = QColor("#8a8f96")
_GAP = 8


class LocaleTreeDelegate(QStyledItemDelegate):
    """Paint the base row, then the item description in a muted color."""

    def paint(self, painter: QPainter, option: QStyleOptionViewItem, index) -> None:  # noqa: N802
        super().paint(painter, option, index)
        description = index.data(DESCRIPTION_ROLE)
        if not isinstance(description, str) or not description:
            return
        opt = QStyleOptionViewItem(option)
        self.initStyleOption(opt, index)
        style = opt.widget.style() if opt.widget is not None else None
        if style is None:
            return
        text_rect = style.subElementRect(
            QStyle.SubElement.SE_ItemViewItemText, opt, opt.widget
        )
        label_width = opt.fontMetrics.horizontalAdvance(opt.text)
        rect = text_rect.adjusted(label_width + _GAP, 0, 0, 0)
        if rect.width() <= 0:
            return
        elided = opt.fontMetrics.elidedText(
            description.replace("\n", " "), Qt.ElideRight, rect.width()
        )
        painter.save()
        painter.setPen(_DESCRIPTION_COLOR)
        painter.drawText(
            rect, Qt.AlignLeft | Qt.AlignVCenter | Qt.TextSingleLine, elided
        )
        painter.restore()
