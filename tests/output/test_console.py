"""Tests for the Rich console factory."""

from eagov.output.console import create_console, get_output, style_for_severity


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("[ea.ok]OK[/ea.ok] done")
        assert get_output(console) == "OK done\n"

    def test_width_override(self) -> None:
        assert create_console(width=60).width == 60

    def test_severity_styles(self) -> None:
        assert style_for_severity("error") == "ea.error"
        assert style_for_severity("warning") == "ea.warning"
        assert style_for_severity("info") == ""
