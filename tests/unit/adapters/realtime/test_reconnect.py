"""
재연결 정책 테스트
"""

import pytest

from adapters.realtime.reconnect import ReconnectPolicy


class TestReconnectPolicy:
    """ReconnectPolicy 테스트"""

    def test_default_is_fixed_five_seconds(self) -> None:
        """기본 5초 고정"""
        policy = ReconnectPolicy()
        assert [policy.next_delay(i) for i in range(3)] == [5.0, 5.0, 5.0]

    def test_fixed(self) -> None:
        """고정 대기"""
        assert ReconnectPolicy.fixed(2).next_delay(10) == 2

    def test_exponential_capped(self) -> None:
        """지수 증가 후 최대값 고정"""
        policy = ReconnectPolicy.exponential(initial=1, maximum=10, factor=2)
        assert [policy.next_delay(i) for i in range(6)] == [1, 2, 4, 8, 10, 10]

    def test_negative_attempt(self) -> None:
        """음수 attempt 거부"""
        with pytest.raises(ValueError):
            ReconnectPolicy().next_delay(-1)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial": -1, "maximum": 5},
            {"initial": 5, "maximum": 1},
            {"initial": 1, "maximum": 5, "factor": 0.5},
        ],
    )
    def test_invalid(self, kwargs: dict) -> None:
        """잘못된 설정 거부"""
        with pytest.raises(ValueError):
            ReconnectPolicy(**kwargs)
