from .size_info import check_weight
from .treemap_logic import check_canvas, layout


class TreeContent:
    def __init__(self, name, weight=0.0, children=None, data=None):
        self.name = name
        self.weight = weight
        self.data = data or {}
        self.children = children or [] # 如果有子节点，则它是分组

    @classmethod
    def from_dict(cls, d):
        children = [cls.from_dict(c) for c in d.get('children') or []]
        return cls(d.get('name', ''), float(d.get('weight', 0)), children, d.get('data'))

    @property
    def is_group(self):
        return bool(self.children)

    @property
    def value_weight(self):
        """叶子节点返回自身权重，分组返回所有子节点权重之和"""
        if self.children:
            return sum(child.value_weight for child in self.children)
        return self.weight

    def formatted_weight(self):
        val = self.value_weight
        for unit in ['', 'K', 'M', 'G']:
            if abs(val) < 1000.0:
                return f"{val:.1f}{unit}"
            val /= 1000.0
        return f"{val:.1f}T"

    def __repr__(self):
        return f"TreeContent({self.name!r}, {self.value_weight!r}, children={len(self.children)})"


def layout_tree(contents, x, y, width, height, settings=None):
    """
    嵌套布局：先布局当前层级，再在每个分组的矩形内部（扣除头部和边距）布局它的子节点。
    返回扁平的矩形列表，父节点总在它的子孙节点之前。
    先检查画布和整棵树所有叶子的权重，任何一处非法都不会产生部分结果。
    """
    x, y, width, height = check_canvas(x, y, width, height)
    check_tree_weights(contents)
    return _layout_level(contents, x, y, width, height, settings or {})


def check_tree_weights(contents):
    """逐个检查叶子节点的权重；分组的权重由子节点决定，不单独检查"""
    for node in contents:
        if node.children:
            check_tree_weights(node.children)
        else:
            check_weight(node, float(node.weight))


def _layout_level(contents, x, y, width, height, settings):
    header = settings.get('group_header_height', 20)
    header_min = settings.get('group_header_min_height', 40)
    padding = settings.get('group_padding', 2)
    min_inner = settings.get('min_inner_size', 5)

    result = []
    for rect in layout(contents, _value_weight, x, y, width, height):
        result.append(rect)
        node = rect.data
        if not node.is_group:
            continue

        # 为分组头部留出一点空间
        header_h = header if rect.height > header_min else 0
        inner = rect.to_qrectf().adjusted(padding, header_h + padding, -padding, -padding)
        if inner.width() > min_inner and inner.height() > min_inner:
            result.extend(_layout_level(node.children, inner.x(), inner.y(),
                                        inner.width(), inner.height(), settings))
    return result


def node_depths(contents, depth=0, depths=None):
    """按对象身份记录每个节点的嵌套深度，顶层为 0"""
    if depths is None:
        depths = {}
    for node in contents:
        depths[id(node)] = depth
        node_depths(node.children, depth + 1, depths)
    return depths


def _value_weight(content):
    return content.value_weight
