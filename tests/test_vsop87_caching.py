"""Tests for VSOP87 file download and cached table loading."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from vsopjax.errors import InvalidArgumentError
from vsopjax.vsop87 import (
    VSOP87D_FILENAMES,
    Planet,
    PlanetTable,
    download_vsop87_file,
    get_planet_table,
    load_cached_planet_table,
    vsop87d_url,
)

_ZERO = "".join(f"{0:3d}" for _ in range(12))


def _synthetic_file(body: int) -> str:
    """A minimal headerless version-D file with one term per coordinate."""
    lines = []
    for coordinate, value in ((1, 1.0), (2, 0.0), (3, 2.5)):
        head = f" 4{body}{coordinate}0{1:5d}"
        lines.append(f"{head}{_ZERO} {0.0:17.11f} {value:17.11f} {value:18.11f} {0.0:14.11f} {0.0:20.11f}")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# download_vsop87_file tests
# ---------------------------------------------------------------------------


class TestDownloadVsop87File:
    """Tests for download_vsop87_file."""

    @pytest.mark.ci
    def test_download_success(self, tmp_path: Path) -> None:
        """Actual download produces a parseable Earth file."""
        from vsopjax.vsop87 import load_planet_table_from_file

        dest = tmp_path / "VSOP87D.ear"
        result = download_vsop87_file(Planet.EARTH, dest)
        assert result.exists()
        table = load_planet_table_from_file(result)
        assert table.planet is Planet.EARTH
        assert table.longitude.n_terms > 1000

    @pytest.mark.ci
    def test_download_bad_url_raises(self, tmp_path: Path) -> None:
        dest = tmp_path / "bad.txt"
        with pytest.raises((httpx.HTTPStatusError, httpx.TransportError)):
            download_vsop87_file(
                Planet.EARTH,
                dest,
                url="https://cdsarc.cds.unistra.fr/ftp/VI/81/nonexistent_file",
                timeout=10.0,
            )

    def test_download_creates_parent_dirs(self, tmp_path: Path) -> None:
        """Parent directories are created if they do not exist."""
        dest = tmp_path / "deep" / "nested" / "VSOP87D.mar"
        assert not dest.parent.exists()

        with patch("vsopjax.vsop87._download.httpx.Client") as mock_client_cls:
            mock_client = mock_client_cls.return_value.__enter__.return_value
            mock_response = mock_client.get.return_value
            mock_response.text = _synthetic_file(4)
            mock_response.raise_for_status.return_value = None

            result = download_vsop87_file(Planet.MARS, dest)
            mock_client.get.assert_called_once_with(vsop87d_url(Planet.MARS))

        assert result == dest.resolve()
        assert dest.read_text(encoding="utf-8") == _synthetic_file(4)

    def test_http_error_propagates(self, tmp_path: Path) -> None:
        dest = tmp_path / "VSOP87D.ear"
        request = httpx.Request("GET", vsop87d_url(Planet.EARTH))
        error = httpx.HTTPStatusError("404", request=request, response=httpx.Response(404, request=request))

        with patch("vsopjax.vsop87._download.httpx.Client") as mock_client_cls:
            mock_response = mock_client_cls.return_value.__enter__.return_value.get.return_value
            mock_response.raise_for_status.side_effect = error
            with pytest.raises(httpx.HTTPStatusError):
                download_vsop87_file(Planet.EARTH, dest)

        assert not dest.exists()

    def test_default_urls(self) -> None:
        assert vsop87d_url(Planet.EARTH).endswith("/VSOP87D.ear")
        assert vsop87d_url(Planet.NEPTUNE).endswith("/VSOP87D.nep")
        assert "cds" in vsop87d_url(Planet.MERCURY)
        assert vsop87d_url("mars") == vsop87d_url(Planet.MARS)

    def test_url_invalid_planet_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            vsop87d_url(8)

    def test_filenames_cover_all_planets(self) -> None:
        assert set(VSOP87D_FILENAMES) == set(Planet)
        assert len(set(VSOP87D_FILENAMES.values())) == 8


# ---------------------------------------------------------------------------
# load_cached_planet_table tests
# ---------------------------------------------------------------------------


class TestLoadCachedPlanetTable:
    """Tests for load_cached_planet_table."""

    def test_existing_file_reused(self, tmp_path: Path) -> None:
        """A cached file is loaded without downloading."""
        dest = tmp_path / "VSOP87D.ear"
        dest.write_text(_synthetic_file(3), encoding="utf-8")

        with patch("vsopjax.vsop87._providers.download_vsop87_file") as mock_dl:
            table = load_cached_planet_table(Planet.EARTH, dest)
            mock_dl.assert_not_called()

        assert isinstance(table, PlanetTable)
        assert table is not get_planet_table(Planet.EARTH)
        assert table.radius.terms[0][0, 0] == 2.5

    def test_missing_file_triggers_download(self, tmp_path: Path) -> None:
        dest = tmp_path / "VSOP87D.jup"

        def fake_download(planet, fp):
            Path(fp).write_text(_synthetic_file(5), encoding="utf-8")
            return Path(fp)

        with patch("vsopjax.vsop87._providers.download_vsop87_file", side_effect=fake_download) as mock_dl:
            table = load_cached_planet_table(Planet.JUPITER, dest)
            mock_dl.assert_called_once_with(Planet.JUPITER, dest)

        assert table.planet is Planet.JUPITER
        assert table.longitude.n_terms == 1

    def test_download_failure_falls_back_to_bundled(self, tmp_path: Path, caplog) -> None:
        dest = tmp_path / "VSOP87D.ven"

        with patch(
            "vsopjax.vsop87._providers.download_vsop87_file",
            side_effect=httpx.ConnectError("network error"),
        ):
            with caplog.at_level("WARNING", logger="vsopjax.vsop87._providers"):
                table = load_cached_planet_table(Planet.VENUS, dest)

        assert table is get_planet_table(Planet.VENUS)
        assert "falling back" in caplog.text

    def test_corrupt_file_falls_back_to_bundled(self, tmp_path: Path) -> None:
        dest = tmp_path / "VSOP87D.sat"
        dest.write_text("this is not VSOP87 data\n" * 10, encoding="utf-8")

        with patch("vsopjax.vsop87._providers.download_vsop87_file") as mock_dl:
            table = load_cached_planet_table(Planet.SATURN, dest)
            mock_dl.assert_not_called()

        assert table is get_planet_table(Planet.SATURN)

    def test_wrong_planet_falls_back_to_bundled(self, tmp_path: Path) -> None:
        dest = tmp_path / "VSOP87D.ura"
        dest.write_text(_synthetic_file(3), encoding="utf-8")
        table = load_cached_planet_table(Planet.URANUS, dest)
        assert table is get_planet_table(Planet.URANUS)

    def test_invalid_planet_raises_before_download(self, tmp_path: Path) -> None:
        with patch("vsopjax.vsop87._providers.download_vsop87_file") as mock_dl:
            with pytest.raises(InvalidArgumentError):
                load_cached_planet_table(8, tmp_path / "VSOP87D.xxx")
            mock_dl.assert_not_called()

    def test_default_filepath(self, monkeypatch, tmp_path: Path) -> None:
        """When filepath is None, the cache directory is used."""
        monkeypatch.setenv("VSOPJAX_CACHE", str(tmp_path))
        expected = tmp_path / "vsop87" / "VSOP87D.mer"
        expected.parent.mkdir(parents=True)
        expected.write_text(_synthetic_file(1), encoding="utf-8")

        with patch("vsopjax.vsop87._providers.download_vsop87_file") as mock_dl:
            table = load_cached_planet_table(Planet.MERCURY)
            mock_dl.assert_not_called()

        assert table.planet is Planet.MERCURY
        assert table.radius.terms[0][0, 0] == 2.5
