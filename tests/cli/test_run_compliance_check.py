import pytest

from scripts.run_compliance_check import main


@pytest.mark.parametrize("period", ["2025-13", "2025-00", "2025-ab", "2025"])
def test_invalid_period_exits_with_message(period, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    with pytest.raises(SystemExit, match="Invalid --period"):
        main(["--period", period])
