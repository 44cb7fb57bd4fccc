"""Tests for size-tiered file loading and version signatures."""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from repoview.collectors.file_load import collect_file_load
from repoview.signature import file_version_signature


class _RecordingRenderer:
    def __init__(self, diagram_valid: bool = True) -> None:
        self.calls: list[tuple[str, str, bool]] = []
        self.diagram_valid = diagram_valid

    def render_markdown(self, content: str, is_dark_theme: bool) -> str:
        self.calls.append(("markdown", content, is_dark_theme))
        return f"<md>{content}</md>"

    def validate_diagram(self, content: str) -> bool:
        return self.diagram_valid

    def render_diagram(self, content: str, is_dark_theme: bool) -> str:
        self.calls.append(("diagram", content, is_dark_theme))
        return "<diagram/>"


class FileLoadTextTests(unittest.TestCase):
    def test_small_text_is_read_fully_with_current_signature(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("hello\nworld\n", encoding="utf-8")

            snapshot = collect_file_load(7, path, is_dark_theme=True)

            self.assertEqual(snapshot.tab_id, 7)
            self.assertEqual(snapshot.file_content, "hello\nworld\n")
            self.assertIsNone(snapshot.file_preview_notice)
            self.assertIsNone(snapshot.webview_content)
            self.assertIsNone(snapshot.image_path)
            self.assertEqual(snapshot.file_signature, file_version_signature(path))
            self.assertEqual(snapshot.kind, "text")

    def test_crlf_text_is_returned_byte_for_byte(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "windows.txt"
            path.write_bytes(b"one\r\ntwo\r\n")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.file_content, "one\r\ntwo\r\n")

    def test_non_utf8_file_loads_empty_without_notice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.dat"
            path.write_bytes(b"\x89\xff\xfe\x00binary")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.file_preview_notice)
            self.assertEqual(snapshot.file_signature, file_version_signature(path))
            self.assertEqual(snapshot.kind, "empty")

    def test_oversized_non_utf8_file_loads_empty_without_notice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "blob.dat"
            path.write_bytes(b"\x89\xff\xfe\x00binary" * 4)

            with mock.patch("repoview.collectors.file_load.MAX_FULL_TEXT_LOAD_BYTES", 1):
                snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.file_preview_notice)

    def test_rewriting_file_changes_signature(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.txt"
            path.write_text("a", encoding="utf-8")
            before = collect_file_load(1, path, is_dark_theme=True).file_signature

            path.write_text("abc", encoding="utf-8")

            self.assertNotEqual(before, file_version_signature(path))
            self.assertEqual(collect_file_load(1, path, is_dark_theme=True).file_signature, file_version_signature(path))

    def test_oversized_text_loads_bounded_head_with_notice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "big.log"
            path.write_text("".join(f"line {idx}\n" for idx in range(10)), encoding="utf-8")

            with mock.patch("repoview.collectors.file_load.MAX_FULL_TEXT_LOAD_BYTES", 16), mock.patch(
                "repoview.collectors.file_load.LARGE_TEXT_PREVIEW_LINES", 3
            ):
                snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.file_content, "line 0\nline 1\nline 2\n")
            self.assertEqual(snapshot.file_preview_notice, "Large file (70 B): showing first 3 lines (~256 KB).")
            self.assertEqual(snapshot.kind, "text_preview")

    def test_missing_file_has_no_signature_content_or_notice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            snapshot = collect_file_load(1, Path(tmp) / "gone.txt", is_dark_theme=True)

            self.assertIsNone(snapshot.file_signature)
            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.file_preview_notice)
            self.assertEqual(snapshot.kind, "empty")

    @unittest.skipIf(os.name == "nt" or os.geteuid() == 0, "permission bits are not enforced")
    def test_unreadable_file_keeps_signature_but_no_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "secret.txt"
            path.write_text("x", encoding="utf-8")
            path.chmod(0)
            try:
                snapshot = collect_file_load(1, path, is_dark_theme=True)
            finally:
                path.chmod(0o644)

            self.assertIsNotNone(snapshot.file_signature)
            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.file_preview_notice)


class FileLoadMarkupTests(unittest.TestCase):
    def test_markdown_goes_through_renderer_with_theme(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "README.md"
            path.write_text("# Title\n", encoding="utf-8")
            renderer = _RecordingRenderer()

            snapshot = collect_file_load(1, path, is_dark_theme=False, renderer=renderer)

            self.assertEqual(snapshot.webview_content, "<md># Title\n</md>")
            self.assertEqual(renderer.calls, [("markdown", "# Title\n", False)])
            self.assertEqual(snapshot.file_content, "")

    def test_html_is_passed_through_verbatim(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "page.HTML"
            path.write_text("<p>hi</p>", encoding="utf-8")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.webview_content, "<p>hi</p>")
            self.assertEqual(snapshot.kind, "inline_webview")

    def test_markup_over_inline_ceiling_is_skipped_with_notice(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "huge.md"
            path.write_text("x" * 100, encoding="utf-8")
            renderer = _RecordingRenderer()

            with mock.patch("repoview.collectors.file_load.MAX_INLINE_WEBVIEW_BYTES", 10):
                snapshot = collect_file_load(1, path, is_dark_theme=True, renderer=renderer)

            self.assertIsNone(snapshot.webview_content)
            self.assertEqual(snapshot.file_content, "")
            self.assertEqual(
                snapshot.file_preview_notice,
                'Inline preview skipped for large Markdown file (100 B). Click "View in Browser".',
            )
            self.assertEqual(renderer.calls, [])

    def test_valid_diagram_is_rendered(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "sketch.excalidraw"
            path.write_text(json.dumps({"type": "excalidraw", "elements": []}), encoding="utf-8")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertIsNotNone(snapshot.webview_content)
            self.assertIn("excalidraw-data", snapshot.webview_content)
            self.assertIn('theme: "dark"', snapshot.webview_content)

    def test_invalid_diagram_yields_no_representation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.excalidraw"
            path.write_text('{"type": "other"}', encoding="utf-8")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertIsNone(snapshot.webview_content)
            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.file_preview_notice)
            self.assertIsNotNone(snapshot.file_signature)


class FileLoadImageTests(unittest.TestCase):
    def test_image_is_referenced_by_path_without_reading(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "logo.PNG"
            path.write_bytes(b"\x89PNG\r\n\x1a\n")

            snapshot = collect_file_load(1, path, is_dark_theme=True)

            self.assertEqual(snapshot.image_path, path)
            self.assertEqual(snapshot.file_content, "")
            self.assertIsNone(snapshot.webview_content)
            self.assertEqual(snapshot.kind, "image")


if __name__ == "__main__":
    unittest.main()
