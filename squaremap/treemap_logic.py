import logging
import math
import numbers
from dataclasses import dataclass

from PyQt6.QtCore import QRectF, QPointF

from .errors import DegenerateInputError, InvalidCanvasError
from .size_info import SizeInfoProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rectangle:
    """
    带关联数据的矩形。
    data 只有在表示剩余空间的临时矩形里才是 None，返回给调用方的矩形总会带上条目。
    """

    data: object
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self):
        return self.width * self.height

    @property
    def aspect_ratio(self):
        """离正方形有多远，1.0 为正方形；有一边为 0 时为 inf"""
        if self.width <= 0 or self.height <= 0:
            return float('inf')
        return max(self.width / self.height, self.height / self.width)

    def contains(self, px, py):
        return self.to_qrectf().contains(QPointF(px, py))

    def to_qrectf(self):
        return QRectF(self.x, self.y, self.width, self.height)


def layout(items, weight_fn, x, y, width, height):
    """
    对一组条目进行 squarify 布局计算。

    返回的矩形按权重从大到小排列，每个条目一个，合起来恰好铺满画布。
    画布尺寸非法或权重为负时抛出 LayoutError；没有条目或权重总和为 0 时返回空列表。
    """
    x, y, width, height = check_canvas(x, y, width, height)

    try:
        processor = SizeInfoProcessor(items, weight_fn, width, height)
    except DegenerateInputError as e:
        logger.debug("Skipping layout: %s", e)
        return []

    return squarify(processor.size_infos, x, y, width, height)


def check_canvas(x, y, width, height):
    """画布坐标必须是有限实数，宽高为正且面积不溢出；返回转换成 float 的 (x, y, width, height)"""
    canvas = [_as_coordinate(v) for v in (x, y, width, height)]
    if None in canvas or canvas[2] <= 0 or canvas[3] <= 0 or not math.isfinite(canvas[2] * canvas[3]):
        raise InvalidCanvasError(width, height)
    return tuple(canvas)


def squarify(size_infos, x, y, width, height):
    """
    计算铺满 (x, y, width, height) 的矩形列表，面积与归一化大小成正比，长宽比尽量接近 1。
    size_infos 必须已按大小降序排列，且归一化大小之和等于 width * height。
    """
    result = []
    remaining = list(size_infos)

    while remaining:
        # 只剩一项时直接占满剩余空间
        if len(remaining) == 1:
            result.append(Rectangle(remaining[0].value, x, y, width, height))
            break

        # 只要加入下一项后最差比例不变差就继续扩展当前行/列（相等时继续）
        i = 1
        while i < len(remaining) and \
                _worst_ratio(remaining[:i], x, y, width, height) >= _worst_ratio(remaining[:i + 1], x, y, width, height):
            i += 1

        current = remaining[:i]
        leftover = _remaining_space(current, x, y, width, height)
        result.extend(_layout(current, x, y, width, height))

        remaining = remaining[i:]
        x, y, width, height = leftover.x, leftover.y, leftover.width, leftover.height

    return result


def item_at(rectangles, px, py):
    """返回包含该点的最深层（列表中最靠后）矩形的条目，没有则返回 None"""
    pos = QPointF(px, py)
    for rect in reversed(rectangles):
        if rect.to_qrectf().contains(pos):
            return rect.data
    return None


def _as_coordinate(value):
    # 只接受有限实数（不含 bool 和数字字符串），统一转成 float
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _covered_area(size_infos):
    return sum(info.normalized_size for info in size_infos)


def _layout(size_infos, x, y, width, height):
    if width >= height:
        return _layout_row(size_infos, x, y, height)
    return _layout_column(size_infos, x, y, width)


def _layout_row(size_infos, x, y, height):
    # 所有矩形宽度相同，自上而下排列
    row_width = _covered_area(size_infos) / height if height > 0 else 0.0
    rects = []
    for info in size_infos:
        h = info.normalized_size / row_width if row_width > 0 else 0.0
        rects.append(Rectangle(info.value, x, y, row_width, h))
        y += h
    return rects


def _layout_column(size_infos, x, y, width):
    # 所有矩形高度相同，从左到右排列
    column_height = _covered_area(size_infos) / width if width > 0 else 0.0
    rects = []
    for info in size_infos:
        w = info.normalized_size / column_height if column_height > 0 else 0.0
        rects.append(Rectangle(info.value, x, y, w, column_height))
        x += w
    return rects


def _remaining_space(size_infos, x, y, width, height):
    covered = _covered_area(size_infos)
    if width >= height:
        # 水平剩余
        w_used = covered / height if height > 0 else 0.0
        return Rectangle(None, x + w_used, y, max(0.0, width - w_used), height)
    # 垂直剩余
    h_used = covered / width if width > 0 else 0.0
    return Rectangle(None, x, y + h_used, width, max(0.0, height - h_used))


def _worst_ratio(size_infos, x, y, width, height):
    return max(rect.aspect_ratio for rect in _layout(size_infos, x, y, width, height))
