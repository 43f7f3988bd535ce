"""
재연결 정책

연결이 끊길 때마다 다음 시도까지의 대기 시간을 결정.
기본은 고정 5초, 필요하면 지수 백오프.
"""

from dataclasses import dataclass

from core.constants import Defaults


@dataclass(frozen=True)
class ReconnectPolicy:
    """재연결 대기 정책

    delay(attempt) = min(initial * factor ** attempt, maximum)

    Attributes:
        initial: 첫 재연결 대기 (초)
        maximum: 최대 대기 (초)
        factor: 시도마다 곱하는 배수 (1이면 고정)
    """

    initial: float = Defaults.RECONNECT_DELAY_SEC
    maximum: float = Defaults.RECONNECT_DELAY_SEC
    factor: float = 1.0

    def __post_init__(self) -> None:
        if self.initial < 0:
            raise ValueError(f"initial must be >= 0: {self.initial}")
        if self.maximum < self.initial:
            raise ValueError(f"maximum must be >= initial: {self.maximum} < {self.initial}")
        if self.factor < 1:
            raise ValueError(f"factor must be >= 1: {self.factor}")

    @classmethod
    def fixed(cls, delay: float = Defaults.RECONNECT_DELAY_SEC) -> "ReconnectPolicy":
        """매번 같은 대기 시간"""
        return cls(initial=delay, maximum=delay, factor=1.0)

    @classmethod
    def exponential(
        cls,
        initial: float = 1.0,
        maximum: float = 30.0,
        factor: float = 2.0,
    ) -> "ReconnectPolicy":
        """지수 백오프 (initial → initial*factor → ... → maximum)"""
        return cls(initial=initial, maximum=maximum, factor=factor)

    def next_delay(self, attempt: int) -> float:
        """attempt번째 재연결 전 대기 시간 (attempt는 0부터)

        성공적으로 연결되면 호출자가 attempt를 0으로 되돌림.
        """
        if attempt < 0:
            raise ValueError(f"attempt must be >= 0: {attempt}")
        if self.factor == 1.0:
            return self.initial
        return min(self.initial * self.factor ** attempt, self.maximum)
