"""Tests for indospend.config."""

import stat
from pathlib import Path

import pytest

from indospend.config import (
    create_default_config,
    get_conversion_rate,
    get_default_currency,
    load_config,
    load_settings,
    save_config,
    set_conversion_rate,
)
from indospend.domain.models import Currency


class TestConfig:
    """Tests for loading and saving config."""

    def test_default_config(self, tmp_path: Path) -> None:
        """Should write defaults with owner-only permissions."""
        path = tmp_path / "indospend" / "config.toml"

        create_default_config(path)

        assert load_config(path) == {"conversion_rate": 10500.0, "default_currency": "SGD"}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """Should fall back to defaults without a config file."""
        path = tmp_path / "missing.toml"

        assert get_conversion_rate(path) == 10500.0
        assert get_default_currency(path) == Currency.SGD

    def test_partial_config_merges_defaults(self, tmp_path: Path) -> None:
        """Should fill in missing keys."""
        path = tmp_path / "config.toml"
        save_config({"default_currency": "idr"}, path)

        settings = load_settings(path)

        assert settings["conversion_rate"] == 10500.0
        assert get_default_currency(path) == Currency.IDR

    def test_set_conversion_rate(self, tmp_path: Path) -> None:
        """Should persist the rate and keep other keys."""
        path = tmp_path / "config.toml"
        save_config({"default_currency": "IDR"}, path)

        set_conversion_rate(11250.5, path)

        assert load_config(path) == {"conversion_rate": 11250.5, "default_currency": "IDR"}

    def test_set_conversion_rate_rejects_non_positive(self, tmp_path: Path) -> None:
        """Should refuse zero or negative rates."""
        with pytest.raises(ValueError):
            set_conversion_rate(0, tmp_path / "config.toml")

    def test_unknown_default_currency(self, tmp_path: Path) -> None:
        """Should raise for currencies that are not tracked."""
        path = tmp_path / "config.toml"
        save_config({"default_currency": "USD"}, path)

        with pytest.raises(ValueError):
            get_default_currency(path)

    def test_set_conversion_rate_rejects_non_finite(self, tmp_path: Path) -> None:
        """Should refuse NaN and infinite rates without writing the file."""
        path = tmp_path / "config.toml"

        for rate in (float("nan"), float("inf")):
            with pytest.raises(ValueError):
                set_conversion_rate(rate, path)

        assert not path.exists()

    def test_non_finite_stored_rate(self, tmp_path: Path) -> None:
        """Should raise ValueError for a NaN or infinite rate in the file."""
        path = tmp_path / "config.toml"

        for rate in (float("nan"), float("inf")):
            save_config({"conversion_rate": rate}, path)
            with pytest.raises(ValueError):
                get_conversion_rate(path)

    def test_wrong_type_stored_rate(self, tmp_path: Path) -> None:
        """Should raise ValueError, not TypeError, for a non-numeric rate."""
        path = tmp_path / "config.toml"
        save_config({"conversion_rate": [1]}, path)

        with pytest.raises(ValueError, match="must be a number"):
            get_conversion_rate(path)

    def test_text_stored_rate(self, tmp_path: Path) -> None:
        """Should raise ValueError for a rate that is not a number string."""
        path = tmp_path / "config.toml"
        save_config({"conversion_rate": "lots"}, path)

        with pytest.raises(ValueError):
            get_conversion_rate(path)

    def test_wrong_type_default_currency(self, tmp_path: Path) -> None:
        """Should raise ValueError for a default currency that is not a string."""
        path = tmp_path / "config.toml"
        save_config({"default_currency": 5}, path)

        with pytest.raises(ValueError, match="currency code"):
            get_default_currency(path)
