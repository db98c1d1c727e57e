"""字节分类: 判断 UTF-8 合法性, 统计中文字符 (UTF-8 码点 / GBK 字节对)。
全部为纯函数, 不做任何 IO。
"""
from __future__ import annotations
from typing import Tuple

# CJK 统一汉字基本区 + 补充的一小段, 有意不包含扩展区/标点/全角
CJK_RANGES=((0x4E00,0x9FA5),(0x9FA6,0x9FCB))
# GB2312 二级汉字区 (GBK 内): 首字节 0xB0-0xF7, 尾字节 0xA1-0xFE
GBK_LEAD=(0xB0,0xF7)
GBK_TRAIL=(0xA1,0xFE)


def is_valid_utf8(data:bytes)->bool:
    try:
        data.decode('utf-8')
    except UnicodeDecodeError:
        return False
    return True


def is_chinese_char(ch:str)->bool:
    cp=ord(ch)
    return any(lo<=cp<=hi for lo,hi in CJK_RANGES)


def count_chinese_in_utf8(data:bytes)->int:
    try:
        text=data.decode('utf-8')
    except UnicodeDecodeError:
        return 0
    return sum(1 for ch in text if is_chinese_char(ch))


def contains_chinese_in_utf8(data:bytes)->bool:
    try:
        text=data.decode('utf-8')
    except UnicodeDecodeError:
        return False
    return any(is_chinese_char(ch) for ch in text)


def is_gbk_pair(lead:int, trail:int)->bool:
    return GBK_LEAD[0]<=lead<=GBK_LEAD[1] and GBK_TRAIL[0]<=trail<=GBK_TRAIL[1]


def scan_gbk_pairs(data:bytes)->Tuple[int,int]:
    """返回 (匹配字节对总数, 最长连续匹配数)。
    命中后前进 2 字节, 未命中前进 1 字节; 两个计数共用同一次扫描, 故连续数 <= 总数。
    """
    total=run=best=0
    i=0; n=len(data)
    while i+1<n:
        if is_gbk_pair(data[i],data[i+1]):
            total+=1; run+=1
            if run>best: best=run
            i+=2
        else:
            run=0
            i+=1
    return total,best


def count_chinese_gbk_pairs(data:bytes, overlapping:bool=False)->int:
    # overlapping=True: 每个字节位置都检查一次 (诊断用, 一个汉字可能被重复计数)
    if overlapping:
        return sum(1 for i in range(len(data)-1) if is_gbk_pair(data[i],data[i+1]))
    return scan_gbk_pairs(data)[0]


def max_consecutive_gbk_pairs(data:bytes)->int:
    return scan_gbk_pairs(data)[1]


def high_byte_count(data:bytes)->int:
    return sum(1 for b in data if b>=0x80)
