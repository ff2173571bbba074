import math
from dataclasses import dataclass, replace

from .errors import DegenerateInputError, InvalidWeightError, NegativeWeightError


def check_weight(value, size):
    """权重必须是不小于 0 的有限数，否则抛出对应的 InvalidWeightError"""
    if math.isnan(size) or math.isinf(size):
        raise InvalidWeightError(value, size)
    if size < 0:
        raise NegativeWeightError(value, size)
    return size


@dataclass(frozen=True)
class SizeInfo:
    """
    包装一个原始条目，记录它的原始权重和按画布面积归一化后的大小。
    normalized_size 为 -1 表示尚未归一化。
    """

    value: object
    raw_size: float
    normalized_size: float = -1.0

    @property
    def is_normalized(self):
        return self.normalized_size >= 0

    def normalize(self, total_size, total_area, scale=1.0):
        """
        按 (raw_size / scale) / total_size * total_area 归一化。
        total_size 是按 scale 缩放后的权重总和；先除后乘，避免极小或极大的权重溢出。
        """
        # 已归一化则原样返回，重复调用结果不变
        if self.is_normalized:
            return self
        return replace(self, normalized_size=(self.raw_size / scale) / total_size * total_area)


class SizeInfoProcessor:
    """
    将条目列表转换为按权重降序排列、并归一化到画布面积的 SizeInfo 列表。

    分两遍处理：先求出全部原始权重之和，再按每项所占比例乘以画布面积归一化。
    """

    def __init__(self, values, size_function, width, height):
        infos = []
        for value in values:
            size = check_weight(value, float(size_function(value)))
            infos.append(SizeInfo(value, size))

        # 大的在前；sort 是稳定的，权重相同的条目保持输入顺序
        infos.sort(key=lambda info: info.raw_size, reverse=True)

        self.total_size = sum(info.raw_size for info in infos)
        self.total_area = width * height
        if not infos or infos[0].raw_size <= 0:
            raise DegenerateInputError(
                f"Nothing to lay out: {len(infos)} item(s), total weight {self.total_size}")

        # 以最大权重为单位，缩放后的总和落在 [1, n] 之间
        scale = infos[0].raw_size
        scaled_total = sum(info.raw_size / scale for info in infos)
        self._infos = [info.normalize(scaled_total, self.total_area, scale) for info in infos]

    @property
    def size_infos(self):
        return list(self._infos)
