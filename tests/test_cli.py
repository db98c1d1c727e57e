import pytest
from gbk2utf8.cli import main, parse_args, print_line
from gbk2utf8.config import Config

TEXT = '中文测试文件'


def test_default_args_match_default_config():
    assert Config.from_args(parse_args([])) == Config()


def test_convert_run(tmp_path, capsys):
    (tmp_path / 'a.c').write_bytes(TEXT.encode('gbk'))
    (tmp_path / 'b.h').write_bytes(b'/* ascii */\n')
    code = main(['-d', str(tmp_path), '-b', '-i'])
    out = capsys.readouterr().out
    assert code == 0
    assert '所有文件处理完成' in out
    assert '已备份至' in out
    assert (tmp_path / 'a.c').read_text(encoding='utf-8') == TEXT
    assert (tmp_path / 'a.c.bak').read_bytes() == TEXT.encode('gbk')


def test_scan_only_with_extensions(tmp_path, capsys):
    (tmp_path / 'c.TXT').write_bytes(TEXT.encode('gbk'))
    code = main(['-d', str(tmp_path), '-s', '-e', 'txt'])
    out = capsys.readouterr().out
    assert code == 0
    assert '可转换' in out
    assert (tmp_path / 'c.TXT').read_bytes() == TEXT.encode('gbk')


def test_failures_reported(tmp_path, capsys):
    (tmp_path / 'bad.c').write_bytes('中文测试'.encode('gbk') + b'\xff')
    code = main(['-d', str(tmp_path)])
    out = capsys.readouterr().out
    assert code == 1
    assert '以下文件处理失败' in out
    assert '[DECODE]' in out


def test_missing_directory(tmp_path, capsys):
    code = main(['-d', str(tmp_path / 'nope')])
    assert code == 2
    assert '扫描目录失败' in capsys.readouterr().err


def test_invalid_arguments():
    with pytest.raises(SystemExit) as e:
        main(['-m', '1.5'])
    assert e.value.code == 2
    with pytest.raises(SystemExit):
        main(['--min-count', '-1'])
    assert main(['-e', ',']) == 2


def test_print_line(capsys):
    print_line('LOG\tCONVERT\tx.c\tx.c\t已转换')
    print_line('LOG\tBACKUP\tx.c\tx.c.bak\t📦 已备份')
    print_line('LOG\tbroken')
    print_line('STATUS 扫描 1')
    out = capsys.readouterr().out
    assert 'x.c: 已转换' in out
    assert '已备份至：x.c.bak' in out
    assert 'broken' not in out
    assert '扫描 1' in out


def test_min_confidence_ignored_under_heuristic_warns(tmp_path, caplog):
    caplog.set_level('WARNING', logger='gbk2utf8.cli')
    assert main(['-d', str(tmp_path), '-m', '0.95']) == 0
    assert '将被忽略' in caplog.text
    caplog.clear()
    assert main(['-d', str(tmp_path), '-m', '0.95', '--strategy', 'statistical']) == 0
    assert '将被忽略' not in caplog.text
