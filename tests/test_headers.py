"""Tests for licensegen_cli.headers."""

import logging

import pytest

from licensegen_cli.errors import PathNotFound
from licensegen_cli.headers import (
    add_header,
    add_headers,
    comment_block,
    has_header,
    iter_source_files,
    spdx_header,
    with_header,
)
from licensegen_cli.registry import LicenseKind, lookup

BLOCK = "# SPDX-License-Identifier: MIT\n"


class TestHeaderText:
    def test_spdx_header(self):
        assert spdx_header(lookup(LicenseKind.APACHE_2)) == "SPDX-License-Identifier: Apache-2.0"

    def test_comment_block_prefixes_every_line(self):
        assert comment_block("one\n\ntwo", "//") == "// one\n//\n// two\n"

    def test_has_header_only_looks_at_the_top(self):
        assert has_header("#!/bin/sh\n# SPDX-License-Identifier: MIT\n")
        buried = "\n" * 10 + "# SPDX-License-Identifier: MIT\n"
        assert not has_header(buried)


class TestWithHeader:
    def test_plain_file(self):
        assert with_header("import os\n", BLOCK) == BLOCK + "import os\n"

    def test_keeps_shebang_first(self):
        source = "#!/usr/bin/env python3\nprint('hi')\n"
        assert with_header(source, BLOCK) == "#!/usr/bin/env python3\n" + BLOCK + "print('hi')\n"

    def test_keeps_shebang_and_encoding_line(self):
        source = "#!/usr/bin/env python\n# -*- coding: utf-8 -*-\nx = 1\n"
        result = with_header(source, BLOCK)
        assert result.splitlines()[:3] == [
            "#!/usr/bin/env python",
            "# -*- coding: utf-8 -*-",
            "# SPDX-License-Identifier: MIT",
        ]

    def test_shebang_without_newline(self):
        assert with_header("#!/bin/sh", BLOCK) == "#!/bin/sh\n" + BLOCK

    def test_empty_file(self):
        assert with_header("", BLOCK) == BLOCK


class TestAddHeaders:
    def test_single_file(self, tmp_path):
        path = tmp_path / "main.py"
        path.write_text("print('hi')\n", encoding="utf-8")
        assert add_headers(path, lookup(LicenseKind.MIT)) == [path]
        assert path.read_text(encoding="utf-8") == BLOCK + "print('hi')\n"

    def test_directory_is_walked_recursively(self, tmp_path):
        (tmp_path / "pkg" / "sub").mkdir(parents=True)
        (tmp_path / "pkg" / "a.rs").write_text("fn main() {}\n", encoding="utf-8")
        (tmp_path / "pkg" / "sub" / "b.rs").write_text("mod b;\n", encoding="utf-8")
        (tmp_path / "pkg" / ".hidden").mkdir()
        (tmp_path / "pkg" / ".hidden" / "c.rs").write_text("mod c;\n", encoding="utf-8")

        touched = add_headers(tmp_path / "pkg", lookup(LicenseKind.MIT), "//")

        assert [path.name for path in touched] == ["a.rs", "b.rs"]
        assert (tmp_path / "pkg" / "sub" / "b.rs").read_text(encoding="utf-8").startswith(
            "// SPDX-License-Identifier: MIT\n"
        )
        assert (tmp_path / "pkg" / ".hidden" / "c.rs").read_text(encoding="utf-8") == "mod c;\n"

    def test_second_run_changes_nothing(self, tmp_path):
        path = tmp_path / "main.py"
        path.write_text("x = 1\n", encoding="utf-8")
        spec = lookup(LicenseKind.MIT)
        add_headers(path, spec)
        first = path.read_text(encoding="utf-8")
        assert add_headers(path, spec) == []
        assert path.read_text(encoding="utf-8") == first

    def test_binary_files_are_skipped(self, tmp_path, caplog):
        path = tmp_path / "image.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n\xff\x00")
        with caplog.at_level(logging.WARNING, logger="licensegen_cli"):
            assert add_header(path, BLOCK) is False
        assert path.read_bytes() == b"\x89PNG\r\n\x1a\n\xff\x00"
        assert "Skipping" in caplog.text

    def test_missing_root(self, tmp_path):
        with pytest.raises(PathNotFound):
            add_headers(tmp_path / "nope", lookup(LicenseKind.MIT))

    def test_iter_source_files_on_file(self, tmp_path):
        path = tmp_path / "one.txt"
        path.write_text("1\n", encoding="utf-8")
        assert list(iter_source_files(path)) == [path]
