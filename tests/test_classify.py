import random
from gbk2utf8.stages.classify import (is_valid_utf8, count_chinese_in_utf8, contains_chinese_in_utf8,
                                      count_chinese_gbk_pairs, max_consecutive_gbk_pairs, scan_gbk_pairs)


def test_utf8_validation():
    assert is_valid_utf8(b'')
    assert is_valid_utf8('中文 abc'.encode('utf-8'))
    assert not is_valid_utf8('中文测试'.encode('gbk'))


def test_chinese_in_utf8_uses_narrow_range():
    assert count_chinese_in_utf8('中文abc'.encode('utf-8')) == 2
    # 标点/全角/扩展区不计
    assert count_chinese_in_utf8('。，Ａ\U00020000'.encode('utf-8')) == 0
    assert count_chinese_in_utf8((chr(0x9FA5) + chr(0x9FCB) + chr(0x9FCC)).encode('utf-8')) == 2
    assert contains_chinese_in_utf8('注释'.encode('utf-8'))
    assert not contains_chinese_in_utf8(b'int main(void);')


def test_chinese_in_utf8_invalid_buffer():
    data = '中文'.encode('gbk')
    assert count_chinese_in_utf8(data) == 0
    assert not contains_chinese_in_utf8(data)


def test_gbk_pairs_counting():
    data = '中文测试文件'.encode('gbk')
    assert count_chinese_gbk_pairs(data) == 6
    assert max_consecutive_gbk_pairs(data) == 6


def test_gbk_pairs_overlapping_diagnostic():
    data = '中文测'.encode('gbk')  # D6D0 CEC4 B2E2
    assert count_chinese_gbk_pairs(data) == 3
    assert count_chinese_gbk_pairs(data, overlapping=True) == 5


def test_run_broken_by_ascii_and_punctuation():
    data = '中'.encode('gbk') + b' ' + '文测'.encode('gbk')
    assert scan_gbk_pairs(data) == (3, 2)
    # 全角逗号 A3AC 不在二级汉字区
    assert scan_gbk_pairs('中文，测试'.encode('gbk')) == (4, 2)


def test_short_buffers():
    for data in (b'', b'\xd6', b'a'):
        assert count_chinese_gbk_pairs(data) == 0
        assert max_consecutive_gbk_pairs(data) == 0


def test_run_never_exceeds_total():
    rnd = random.Random(20240501)
    for _ in range(300):
        data = bytes(rnd.choice((rnd.randint(0xA0, 0xFF), rnd.randint(0, 0xFF))) for _ in range(rnd.randint(0, 64)))
        total, run = scan_gbk_pairs(data)
        assert run <= total
        assert max_consecutive_gbk_pairs(data) <= count_chinese_gbk_pairs(data)
