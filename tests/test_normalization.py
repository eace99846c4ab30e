from __future__ import annotations

from worklens.normalization import is_code_editor, normalize_app_name, normalize_window_title


class TestWindowTitles:
    def test_strips_browser_suffix(self) -> None:
        assert normalize_window_title("chrome.exe", "Pull requests - Google Chrome") == "Pull requests"

    def test_browser_suffix_without_exe(self) -> None:
        assert normalize_window_title("msedge", "Docs - Microsoft Edge") == "Docs"

    def test_strips_extra_tab_count(self) -> None:
        assert normalize_window_title("firefox.exe", "Issues and 3 more pages - Mozilla Firefox") == "Issues"

    def test_collapses_whitespace(self) -> None:
        assert normalize_window_title("Code.exe", "  main.py   -  repo ") == "main.py - repo"

    def test_empty_title_is_none(self) -> None:
        assert normalize_window_title("Code.exe", "   ") is None
        assert normalize_window_title("Code.exe", None) is None


class TestAppNames:
    def test_normalize_drops_path_and_extension(self) -> None:
        assert normalize_app_name(r"C:\Program Files\JetBrains\PyCharm64.EXE") == "pycharm64"
        assert normalize_app_name("/usr/bin/nvim") == "nvim"
        assert normalize_app_name(None) == ""

    def test_code_editor_detection(self) -> None:
        assert is_code_editor("Code.exe")
        assert is_code_editor("cursor")
        assert not is_code_editor("chrome.exe")
        assert not is_code_editor("")
