import pytest

pytest.importorskip('tkinter')

from gbk2utf8.ui.log_view import STAGE_COLORS, stage_tag


def test_every_emitted_stage_has_a_color():
    for stage in ('CONVERT', 'SCAN', 'BACKUP', 'FAIL', 'SKIP'):
        assert stage_tag(stage) == stage
        assert stage in STAGE_COLORS


def test_unknown_stage_falls_back_to_info():
    assert stage_tag('RENAME') == 'INFO'
    assert stage_tag('convert') == 'INFO'
