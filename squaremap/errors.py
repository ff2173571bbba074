class LayoutError(Exception):
    """布局计算失败的基类"""


class InvalidCanvasError(LayoutError):
    """画布宽或高不是正的有限数"""

    def __init__(self, width, height):
        super().__init__(f"Invalid canvas size: {width} x {height}")
        self.width = width
        self.height = height


class DegenerateInputError(LayoutError):
    """没有条目，或者所有权重之和不大于 0"""


class InvalidWeightError(LayoutError):
    """权重为 NaN 或无穷大"""

    def __init__(self, value, weight, message=None):
        super().__init__(message or f"Invalid weight {weight!r} for {value!r}")
        self.value = value
        self.weight = weight


class NegativeWeightError(InvalidWeightError):
    """权重小于 0，面积没有意义"""

    def __init__(self, value, weight):
        super().__init__(value, weight, f"Negative weight {weight!r} for {value!r}")
