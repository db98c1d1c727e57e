from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable, Optional

DEFAULT_DIR='./'
DEFAULT_EXTENSIONS=('c','h')
DEFAULT_MIN_CONFIDENCE=0.8
DEFAULT_MIN_COUNT=4
DEFAULT_MIN_RUN=2
DEFAULT_TLD='cn'
BACKUP_SUFFIX='.bak'

# 检测策略: 仅字节对启发式 / 统计探测(charset-normalizer) / 两者同时满足
STRATEGIES=('heuristic','statistical','combined')
DEFAULT_STRATEGY='heuristic'

# 启发式未判定为 GBK 时给出的固定低置信度
LOW_CONFIDENCE=0.1
# charset-normalizer chaos 不高于此值视为"有把握"
CONFIDENT_CHAOS=0.1

# 来源提示 -> 优先考虑的编码族
LOCALE_ENCODINGS={
    'cn':('gb18030','gbk','gb2312','hz'),
    'sg':('gb18030','gbk','gb2312'),
    'tw':('big5','big5hkscs','cp950'),
    'hk':('big5hkscs','big5','cp950'),
    'jp':('shift_jis','cp932','euc_jp','iso2022_jp'),
    'kr':('euc_kr','cp949','iso2022_kr'),
}

# 归一化为 gbk 的名称 (GB2312/GB18030 与 GBK 同族)
GBK_FAMILY={'gbk','gb2312','gb18030','cp936','hz','ms936','euc_cn','euccn'}


def parse_extensions(text:str|Iterable[str])->frozenset[str]:
    """'c,.H, cpp' -> {'c','h','cpp'}"""
    tokens=re.split(r'[,;\s]+',text) if isinstance(text,str) else list(text)
    exts=frozenset(t.strip().lstrip('.').lower() for t in tokens if t and t.strip().lstrip('.'))
    if not exts:
        raise ValueError('扩展名列表为空')
    return exts


@dataclass(frozen=True)
class Config:
    target_directory:str=DEFAULT_DIR
    extensions:frozenset[str]=frozenset(DEFAULT_EXTENSIONS)
    min_confidence:float=DEFAULT_MIN_CONFIDENCE
    min_total_count:int=DEFAULT_MIN_COUNT
    min_consecutive_run:int=DEFAULT_MIN_RUN
    scan_only:bool=False
    backup:bool=False
    verbose:bool=False
    locale_hint:Optional[str]=DEFAULT_TLD
    strategy:str=DEFAULT_STRATEGY

    def __post_init__(self):
        if not 0.0<=self.min_confidence<=1.0:
            raise ValueError(f'置信度需在 0~1 之间: {self.min_confidence}')
        if self.min_total_count<0 or self.min_consecutive_run<0:
            raise ValueError('最小数量/最小连续长度不能为负')
        if self.strategy not in STRATEGIES:
            raise ValueError(f'未知检测策略: {self.strategy}')
        # 允许传入 list/set, 统一为小写 frozenset
        object.__setattr__(self,'extensions',parse_extensions(self.extensions))
        if self.locale_hint is not None:
            hint=self.locale_hint.strip().lower().lstrip('.')
            object.__setattr__(self,'locale_hint',hint or None)

    @property
    def uses_heuristic(self)->bool:
        return self.strategy in ('heuristic','combined')

    @property
    def uses_statistical(self)->bool:
        return self.strategy in ('statistical','combined')

    def accepts_extension(self, ext:str)->bool:
        return ext.lower().lstrip('.') in self.extensions

    @classmethod
    def from_args(cls, args)->'Config':
        return cls(
            target_directory=args.dir,
            extensions=parse_extensions(args.extensions),
            min_confidence=args.min_confidence,
            min_total_count=args.min_count,
            min_consecutive_run=args.min_run,
            scan_only=args.scan_only,
            backup=args.backup,
            verbose=args.show_info,
            locale_hint=args.tld,
            strategy=args.strategy,
        )
