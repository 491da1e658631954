"""Tests for S03: Write Descriptor step and desc.txt format."""

import pytest

from vid2boot.core.contracts import DescriptorVariant, LoopMode, Resolution
from vid2boot.core.errors import FilesystemError
from vid2boot.steps.s03_write_descriptor._desc_format import (
    parse_descriptor,
    render_directive,
    render_header,
)
from vid2boot.steps.s03_write_descriptor.config import WriteDescriptorConfig
from vid2boot.steps.s03_write_descriptor.contracts import WriteDescriptorInput
from vid2boot.steps.s03_write_descriptor.step import WriteDescriptorStep

RES = Resolution(width=1080, height=2400)


def _make_parts(result_dir, count: int) -> list[str]:
    names = [f"part{i}" for i in range(count)]
    for name in names:
        (result_dir / name).mkdir()
    return names


class TestRenderHeader:
    def test_standard(self):
        assert render_header(RES, 30) == "1080 2400 30"

    def test_offset(self):
        assert render_header(RES, 30, DescriptorVariant.OFFSET, (10, 20)) == "g 1080 2400 10 20 30"

    def test_offset_ignored_for_standard(self):
        assert render_header(RES, 60, DescriptorVariant.STANDARD, (10, 20)) == "1080 2400 60"


class TestRenderDirective:
    @pytest.mark.parametrize(
        "mode, expected",
        [
            (LoopMode.PLAY_FULL, "c 1 0 part3"),
            (LoopMode.STOP_ON_BOOT, "p 1 0 part3"),
            (LoopMode.LOOP, "c 0 0 part3"),
        ],
    )
    def test_loop_modes(self, mode, expected):
        assert render_directive("part3", mode) == expected

    def test_background(self):
        assert render_directive("part0", background="#FFFFFF") == "c 1 0 part0 #FFFFFF"


class TestParseDescriptor:
    def test_standard(self):
        desc = parse_descriptor("1080 2400 30\nc 1 0 part0\nc 1 0 part1\n")
        assert (desc.width, desc.height, desc.fps) == (1080, 2400, 30)
        assert desc.variant is DescriptorVariant.STANDARD
        assert [d.part for d in desc.directives] == ["part0", "part1"]

    def test_offset_variant(self):
        desc = parse_descriptor("g 1080 2400 10 20 30\np 1 0 part0 #000000\n")
        assert desc.variant is DescriptorVariant.OFFSET
        assert desc.offset == (10, 20)
        assert desc.fps == 30
        assert desc.directives[0].kind == "p"
        assert desc.directives[0].background == "#000000"

    def test_blank_lines_ignored(self):
        desc = parse_descriptor("\n720 1280 24\n\nc 0 0 part0\n\n")
        assert desc.directives[0].count == 0

    @pytest.mark.parametrize(
        "text",
        ["", "1080 2400\n", "g 1080 2400 30\n", "a b c\n", "1 1 1\nx 1 0 part0\n", "1 1 1\nc one 0 part0\n"],
    )
    def test_malformed(self, text):
        with pytest.raises(ValueError):
            parse_descriptor(text)


class TestWriteDescriptorStep:
    def test_writes_header_and_directives(self, workspace):
        parts = _make_parts(workspace.result_dir, 3)
        step = WriteDescriptorStep(WriteDescriptorConfig(), workspace)
        output = step.execute(
            WriteDescriptorInput(result_dir=workspace.result_dir, part_names=parts, resolution=RES, fps=30)
        )
        assert output.desc_path == workspace.result_dir / "desc.txt"
        assert output.desc_path.read_text() == "1080 2400 30\nc 1 0 part0\nc 1 0 part1\nc 1 0 part2\n"
        assert output.header == "1080 2400 30"
        assert len(output.directives) == 3

    def test_offset_variant(self, workspace):
        parts = _make_parts(workspace.result_dir, 1)
        cfg = WriteDescriptorConfig(variant=DescriptorVariant.OFFSET, offset=(10, 20))
        output = WriteDescriptorStep(cfg, workspace).execute(
            WriteDescriptorInput(result_dir=workspace.result_dir, part_names=parts, resolution=RES, fps=30)
        )
        assert output.desc_path.read_text().splitlines() == ["g 1080 2400 10 20 30", "c 1 0 part0"]

    def test_one_directive_per_part(self, workspace):
        parts = _make_parts(workspace.result_dir, 5)
        output = WriteDescriptorStep(WriteDescriptorConfig(), workspace).execute(
            WriteDescriptorInput(result_dir=workspace.result_dir, part_names=parts, resolution=RES, fps=30)
        )
        desc = parse_descriptor(output.desc_path.read_text())
        assert [d.part for d in desc.directives] == parts

    def test_round_trip_through_parser(self, workspace):
        parts = _make_parts(workspace.result_dir, 2)
        cfg = WriteDescriptorConfig(loop_mode=LoopMode.LOOP, background="#123456")
        output = WriteDescriptorStep(cfg, workspace).execute(
            WriteDescriptorInput(result_dir=workspace.result_dir, part_names=parts, resolution=RES, fps=25)
        )
        desc = parse_descriptor(output.desc_path.read_text())
        assert desc.fps == 25
        assert all(d.kind == "c" and d.count == 0 and d.background == "#123456" for d in desc.directives)

    def test_missing_part_dir(self, workspace):
        step = WriteDescriptorStep(WriteDescriptorConfig(), workspace)
        with pytest.raises(FilesystemError, match="Input validation failed"):
            step.execute(
                WriteDescriptorInput(
                    result_dir=workspace.result_dir, part_names=["part0"], resolution=RES, fps=30
                )
            )

    def test_no_parts(self, workspace):
        step = WriteDescriptorStep(WriteDescriptorConfig(), workspace)
        with pytest.raises(FilesystemError):
            step.execute(
                WriteDescriptorInput(result_dir=workspace.result_dir, part_names=[], resolution=RES, fps=30)
            )
