import os
import pytest
from gbk2utf8 import utils
from gbk2utf8.config import Config
from gbk2utf8.utils import ErrorKind, ErrorLedger, WalkError, iter_sources, norm_ext, backup_path_for
from gbk2utf8.stages.policy import process_tree


def _collect(root, exts=('c', 'h')):
    ledger = ErrorLedger()
    cfg = Config(target_directory=str(root), extensions=exts)
    return list(iter_sources(str(root), cfg.accepts_extension, ledger)), ledger


def test_recursive_and_case_insensitive(tmp_path):
    (tmp_path / 'sub' / 'deep').mkdir(parents=True)
    (tmp_path / 'A.C').write_bytes(b'')
    (tmp_path / 'sub' / 'x.h').write_bytes(b'')
    (tmp_path / 'sub' / 'deep' / 'y.c').write_bytes(b'')
    (tmp_path / 'sub' / 'z.cpp').write_bytes(b'')
    (tmp_path / 'sub' / 'y.c.bak').write_bytes(b'')
    files, ledger = _collect(tmp_path)
    names = [os.path.relpath(p, tmp_path) for p in files]
    assert names == ['A.C', os.path.join('sub', 'x.h'), os.path.join('sub', 'deep', 'y.c')]
    assert not ledger


def test_extension_list(tmp_path):
    (tmp_path / 'a.cpp').write_bytes(b'')
    (tmp_path / 'b.c').write_bytes(b'')
    files, _ = _collect(tmp_path, exts='cpp,.HPP')
    assert [os.path.basename(p) for p in files] == ['a.cpp']


def test_root_errors_are_fatal(tmp_path):
    with pytest.raises(WalkError):
        _collect(tmp_path / 'missing')
    (tmp_path / 'file.c').write_bytes(b'')
    with pytest.raises(WalkError):
        _collect(tmp_path / 'file.c')


def test_unreadable_subdirectory_does_not_stop_siblings(tmp_path, monkeypatch):
    for name in ('a', 'b'):
        (tmp_path / name).mkdir()
        (tmp_path / name / 'x.c').write_bytes('中文测试文件'.encode('gbk'))
    bad = str(tmp_path / 'a')
    real = utils._list_dir
    def fake(path):
        if path == bad:
            raise PermissionError(13, 'Permission denied', path)
        return real(path)
    monkeypatch.setattr(utils, '_list_dir', fake)
    summary = process_tree(Config(target_directory=str(tmp_path)), lambda l: None)
    assert summary.converted == 1
    assert summary.ledger.get(bad)[0] is ErrorKind.DIRECTORY
    assert (tmp_path / 'b' / 'x.c').read_bytes().decode('utf-8') == '中文测试文件'
    assert (tmp_path / 'a' / 'x.c').read_bytes() == '中文测试文件'.encode('gbk')


def test_symlinked_directory_not_followed(tmp_path):
    (tmp_path / 'real').mkdir()
    (tmp_path / 'real' / 'x.c').write_bytes(b'')
    try:
        os.symlink(tmp_path / 'real', tmp_path / 'link', target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip('不支持符号链接')
    files, _ = _collect(tmp_path)
    assert [os.path.relpath(p, tmp_path) for p in files] == [os.path.join('real', 'x.c')]


def test_helpers():
    assert norm_ext('dir/Foo.C') == 'c'
    assert norm_ext('Makefile') == ''
    assert backup_path_for('src/foo.c') == 'src/foo.c.bak'
    ledger = ErrorLedger()
    ledger.record('p', ErrorKind.IO, 'x')
    assert 'p' in ledger and len(ledger) == 1
