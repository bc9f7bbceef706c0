import pytest
from pydantic import ValidationError

from lessonbook.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.slot_stride_minutes == 30
        assert settings.revalidate_on_book is True
        assert settings.currency == "USD"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LESSONBOOK_SLOT_STRIDE_MINUTES", "15")
        monkeypatch.setenv("LESSONBOOK_REVALIDATE_ON_BOOK", "false")
        settings = Settings()
        assert settings.slot_stride_minutes == 15
        assert settings.revalidate_on_book is False

    @pytest.mark.parametrize("stride", [0, -30, 24 * 60 + 1])
    def test_stride_out_of_range(self, stride: int) -> None:
        with pytest.raises(ValidationError):
            Settings(slot_stride_minutes=stride)

    def test_stride_out_of_range_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LESSONBOOK_SLOT_STRIDE_MINUTES", "0")
        with pytest.raises(ValidationError):
            Settings()
