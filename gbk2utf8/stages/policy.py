"""单文件处理策略与整树遍历。

每个文件: 读取 -> 检测 -> 判定阈值 -> 跳过 / 仅报告可转换 / 转换。
所有输出都通过 q_log 行回调, 格式与其余阶段一致:
    LOG\\t<阶段>\\t<源>\\t<目标>\\t<信息>
    STATUS <信息>
"""
from __future__ import annotations
import logging, threading
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple
from ..config import Config
from ..utils import ErrorKind, ErrorLedger, iter_sources
from .convert import ConversionOutcome, convert
from .detect import EncodingVerdict, GBK, UTF8, detect, normalize_name

logger=logging.getLogger(__name__)

SKIPPED='skipped'; CONVERTIBLE='convertible'; CONVERTED='converted'; FAILED='failed'
STATES=(CONVERTED,CONVERTIBLE,SKIPPED,FAILED)

REASON_TEXT={
    'utf8':'明确是 UTF-8',
    'not_gbk':'猜测结果不是 GBK',
    'low_confidence':'置信度不足',
    'few_pairs':'中文字节对数量不足',
    'short_run':'连续中文长度不足',
    'undetermined':'无法确定为 GBK',
}


@dataclass
class FileResult:
    path:str
    state:str
    verdict:Optional[EncodingVerdict]=None
    reasons:Tuple[str,...]=()
    outcome:Optional[ConversionOutcome]=None

    @property
    def reason(self)->str:
        return '、'.join(REASON_TEXT.get(r,r) for r in self.reasons)


@dataclass
class WalkSummary:
    ledger:ErrorLedger=field(default_factory=ErrorLedger)
    counts:Dict[str,int]=field(default_factory=lambda:{s:0 for s in STATES})
    cancelled:bool=False

    def add(self, result:FileResult):
        self.counts[result.state]+=1

    @property
    def scanned(self)->int:
        return sum(self.counts.values())

    @property
    def converted(self)->int:
        return self.counts[CONVERTED]

    @property
    def convertible(self)->int:
        return self.counts[CONVERTIBLE]

    @property
    def skipped(self)->int:
        return self.counts[SKIPPED]

    @property
    def failed(self)->int:
        return self.counts[FAILED]

    def line(self)->str:
        return (f'扫描 {self.scanned}  转换 {self.converted}  可转换 {self.convertible}'
                f'  跳过 {self.skipped}  失败 {self.failed}')


def describe(v:EncodingVerdict)->str:
    return (f'猜测编码 = {v.display_name}, 置信度 = {v.confidence:.2f}, '
            f'字节对 = {v.total_chinese_count}, 最长连续 = {v.max_consecutive_run}')


def threshold_failures(v:EncodingVerdict, config:Config)->Tuple[str,...]:
    """当前策略下未满足的阈值 (空元组 = 全部满足)"""
    failed=[]
    if config.uses_statistical:
        if normalize_name(v.guessed)!=GBK:
            failed.append('not_gbk')
        elif v.confidence<config.min_confidence:
            failed.append('low_confidence')
    if config.uses_heuristic:
        if v.total_chinese_count<config.min_total_count:
            failed.append('few_pairs')
        if v.max_consecutive_run<config.min_consecutive_run:
            failed.append('short_run')
    return tuple(failed)


def handle_file(path:str, config:Config, q_log:Callable[[str],None], ledger:ErrorLedger)->FileResult:
    try:
        with open(path,'rb') as f:
            data=f.read()
    except OSError as e:
        ledger.record(path,ErrorKind.IO,f'读取失败: {e}')
        q_log(f'LOG\tFAIL\t{path}\t\t读取失败: {e}')
        return FileResult(path,FAILED)

    verdict=detect(data,config)
    del data

    if verdict.label==UTF8:
        if config.verbose:
            extra=f'(含中文 {verdict.utf8_chinese_count} 个)' if verdict.utf8_chinese_count else ''
            q_log(f'LOG\tSKIP\t{path}\t\t明确是 UTF-8{extra}，跳过')
        return FileResult(path,SKIPPED,verdict,('utf8',))

    reasons=threshold_failures(verdict,config)
    if verdict.label!=GBK or reasons:
        result=FileResult(path,SKIPPED,verdict,reasons or ('undetermined',))
        if config.verbose:
            q_log(f'LOG\tSKIP\t{path}\t\t{describe(verdict)}，{result.reason}，跳过')
        return result

    if config.scan_only:
        q_log(f'LOG\tSCAN\t{path}\t\t{describe(verdict)}，可转换')
        return FileResult(path,CONVERTIBLE,verdict)

    outcome=convert(path,config)
    if not outcome.success:
        ledger.record(path,outcome.error,outcome.message)
        q_log(f'LOG\tFAIL\t{path}\t\t{outcome.message}')
        return FileResult(path,FAILED,verdict,outcome=outcome)
    if outcome.backup_path and config.verbose:
        q_log(f'LOG\tBACKUP\t{path}\t{outcome.backup_path}\t📦 已备份')
    q_log(f'LOG\tCONVERT\t{path}\t{path}\t{describe(verdict)}，已转换')
    return FileResult(path,CONVERTED,verdict,outcome=outcome)


def process_tree(config:Config, q_log:Callable[[str],None], stop_flag:Optional[threading.Event]=None)->WalkSummary:
    """遍历 config.target_directory 并逐个处理。根目录不可读时抛出 WalkError。"""
    summary=WalkSummary()
    for path in iter_sources(config.target_directory,config.accepts_extension,summary.ledger):
        if stop_flag is not None and stop_flag.is_set():
            summary.cancelled=True
            break
        summary.add(handle_file(path,config,q_log,summary.ledger))
    logger.debug('处理结束: %s', summary.line())
    q_log(f'STATUS {"已取消 " if summary.cancelled else ""}{summary.line()}')
    return summary
