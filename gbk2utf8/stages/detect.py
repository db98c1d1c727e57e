from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from charset_normalizer import from_bytes
from ..config import Config, CONFIDENT_CHAOS, GBK_FAMILY, LOCALE_ENCODINGS, LOW_CONFIDENCE
from .classify import count_chinese_in_utf8, high_byte_count, is_valid_utf8, scan_gbk_pairs

logger=logging.getLogger(__name__)

UTF8='utf8'; GBK='gbk'; OTHER='other'


@dataclass(frozen=True)
class EncodingVerdict:
    label:str                        # utf8 | gbk | other
    confidence:float
    total_chinese_count:int=0        # GBK 二级汉字字节对数
    max_consecutive_run:int=0
    guessed:Optional[str]=None       # charset-normalizer 原始猜测名
    utf8_chinese_count:int=0         # 仅 utf8 时统计, 用于展示

    @property
    def display_name(self)->str:
        if self.label==UTF8: return 'utf-8'
        return self.guessed or self.label


def normalize_name(name:Optional[str])->str:
    if not name:
        return OTHER
    key=name.lower().replace('-','_')
    if key in GBK_FAMILY or key.replace('_','') in GBK_FAMILY:
        return GBK
    if key in ('utf_8','utf8','utf_8_sig'):
        return UTF8
    return key


def guess_charset(data:bytes, locale_hint:Optional[str]=None)->Tuple[Optional[str],bool]:
    """charset-normalizer 猜测编码, 返回 (编码名, 是否有把握)。
    给出来源提示时, 在 chaos 可接受的候选中优先选该语言族的编码。
    """
    matches=from_bytes(data)
    best=matches.best()
    if best is None:
        return None,False
    chosen,name=best,best.encoding
    preferred=LOCALE_ENCODINGS.get(locale_hint or '',())
    if preferred and name not in preferred:
        for m in matches:
            if m.chaos>CONFIDENT_CHAOS:
                continue
            hit=next((e for e in preferred if e==m.encoding or e in m.could_be_from_charset),None)
            if hit:
                chosen,name=m,hit
                break
    logger.debug('charset-normalizer: %s chaos=%.3f (hint=%s)', name, chosen.chaos, locale_hint)
    return name,chosen.chaos<=CONFIDENT_CHAOS


def detect(data:bytes, config:Config)->EncodingVerdict:
    # 合法 UTF-8 直接返回, 不做任何 GBK 扫描/解码
    if is_valid_utf8(data):
        return EncodingVerdict(UTF8,1.0,utf8_chinese_count=count_chinese_in_utf8(data))

    total,run=scan_gbk_pairs(data)
    pairs_ok=total>=config.min_total_count and run>=config.min_consecutive_run

    if not config.uses_statistical:
        if not pairs_ok:
            return EncodingVerdict(OTHER,LOW_CONFIDENCE,total,run)
        high=high_byte_count(data)
        coverage=min(1.0,2*total/high) if high else 0.0
        return EncodingVerdict(GBK,coverage,total,run)

    name,confident=guess_charset(data,config.locale_hint)
    confidence=(1.0 if confident else 0.5) if name else 0.0
    accepted=normalize_name(name)==GBK and confidence>=config.min_confidence
    if config.uses_heuristic:
        accepted=accepted and pairs_ok
    return EncodingVerdict(GBK if accepted else OTHER,confidence,total,run,guessed=name)
