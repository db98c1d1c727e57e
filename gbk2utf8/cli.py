"""
GBK 转 UTF-8 工具（自动识别编码）
=================================
递归扫描目录下的代码文件, 检测是否为 GBK 编码, 并可原地转换为 UTF-8。
  * 合法 UTF-8 直接跳过, 不做任何 GBK 解码
  * 检测策略: heuristic(GB2312 二级汉字字节对) / statistical(charset-normalizer) / combined
  * 阈值: 最小置信度 / 最少字节对数 / 最短连续长度
  * 仅扫描 (--scan-only) / 转换前备份为 .bak (--backup)
  * 单个文件失败只记录, 不中断遍历; 结束时统一输出失败列表

示例:
  python -m gbk2utf8 -d ./src -e c,h,cpp -i
  python -m gbk2utf8 -d ./src -s --strategy statistical -t cn
  python -m gbk2utf8 -d ./legacy -b --min-count 8 --min-run 3
"""
from __future__ import annotations
import argparse
import logging
import platform
import sys
from typing import List, Optional
from . import __version__
from .config import (Config, DEFAULT_DIR, DEFAULT_EXTENSIONS, DEFAULT_MIN_CONFIDENCE, DEFAULT_MIN_COUNT,
                     DEFAULT_MIN_RUN, DEFAULT_STRATEGY, DEFAULT_TLD, STRATEGIES)
from .utils import WalkError
from .stages.policy import WalkSummary, process_tree

logger=logging.getLogger(__name__)

LOG_FORMAT='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
STAGE_ICON={'CONVERT':'✅','SCAN':'🔍','SKIP':'⏭ ','BACKUP':'📦','FAIL':'❌'}


def setup_logging(debug:bool):
    level=logging.DEBUG if debug else logging.INFO
    root_logger=logging.getLogger()
    root_logger.setLevel(level)
    if not root_logger.handlers:
        console_handler=logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT,'%Y-%m-%d %H:%M:%S'))
        root_logger.addHandler(console_handler)


def print_line(raw:str):
    """q_log 的控制台实现: LOG\\t阶段\\t源\\t目标\\t信息 -> 可读文本"""
    if raw.startswith('LOG\t'):
        parts=raw.split('\t',4)
        if len(parts)<5:
            return
        _,stage,src,dst,info=parts
        icon=STAGE_ICON.get(stage,'  ')
        if stage=='BACKUP':
            print(f'{icon} 已备份至：{dst}')
        else:
            print(f'{icon} {src}: {info}')
    elif raw.startswith('STATUS '):
        print('-'*60)
        print(raw[7:])


def _ratio(text:str)->float:
    try:
        v=float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'不是数字: {text}')
    if not 0.0<=v<=1.0:
        raise argparse.ArgumentTypeError('置信度需在 0~1 之间')
    return v


def _non_negative(text:str)->int:
    try:
        v=int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'不是整数: {text}')
    if v<0:
        raise argparse.ArgumentTypeError('不能为负数')
    return v


def parse_args(argv:List[str])->argparse.Namespace:
    p=argparse.ArgumentParser(prog='gbk2utf8',description='GBK 转 UTF-8 工具（自动识别编码）')
    p.add_argument('-d','--dir',default=DEFAULT_DIR,help='要扫描的目录路径，默认为当前目录，支持递归')
    p.add_argument('-i','--show-info',action='store_true',help='显示每个文件的编码猜测结果和置信度')
    p.add_argument('-s','--scan-only',action='store_true',help='只扫描文件编码，不执行转换操作')
    p.add_argument('-b','--backup',action='store_true',help='转换前将原文件备份为 .bak 文件')
    p.add_argument('-e','--extensions',default=','.join(DEFAULT_EXTENSIONS),
                   help='要处理的文件扩展名（多个用英文逗号分隔），例如：c,h,cpp')
    p.add_argument('-m','--min-confidence',type=_ratio,default=DEFAULT_MIN_CONFIDENCE,
                   help='要求的最小置信度，达到此值才认为是 GBK 编码，仅 statistical/combined 策略生效 (默认 0.8)')
    p.add_argument('--min-count',type=_non_negative,default=DEFAULT_MIN_COUNT,
                   help='最少中文字节对数量，防止零星字节误判 (默认 4)')
    p.add_argument('--min-run',type=_non_negative,default=DEFAULT_MIN_RUN,
                   help='最短连续中文字节对长度 (默认 2)')
    p.add_argument('-t','--tld',default=DEFAULT_TLD,
                   help='指定来源，用于提高猜测准确性 (例如：cn、tw、jp、kr)')
    p.add_argument('--strategy',choices=STRATEGIES,default=DEFAULT_STRATEGY,
                   help='检测策略: heuristic=字节对启发式, statistical=charset-normalizer, combined=两者都满足')
    p.add_argument('--gui',action='store_true',help='启动图形界面')
    p.add_argument('--debug',action='store_true',help='输出调试日志')
    p.add_argument('--version',action='version',version=f'%(prog)s {__version__}')
    return p.parse_args(argv)


def banner()->str:
    return f'版本 {__version__}，Python {platform.python_version()}（{platform.system()} {platform.machine()}）'


def report(summary:WalkSummary):
    if summary.ledger:
        print('\n以下文件处理失败：')
        for path,(kind,msg) in summary.ledger.items():
            print(f'{path}: [{kind.value}] {msg}')
    else:
        print('✅ 所有文件处理完成')


def main(argv:Optional[List[str]]=None)->int:
    args=parse_args(sys.argv[1:] if argv is None else argv)
    setup_logging(args.debug)
    try:
        config=Config.from_args(args)
    except ValueError as e:
        print(f'参数错误: {e}',file=sys.stderr)
        return 2
    if not config.uses_statistical and args.min_confidence!=DEFAULT_MIN_CONFIDENCE:
        logger.warning('heuristic 策略不使用置信度阈值, -m %s 将被忽略', args.min_confidence)
    if args.gui:
        from .main_app import launch
        launch(config)
        return 0

    logger.debug('运行配置: %s', config)
    print(banner())
    try:
        summary=process_tree(config,print_line)
    except WalkError as e:
        print(f'❌ 扫描目录失败: {e}',file=sys.stderr)
        return 2
    report(summary)
    return 0 if not summary.ledger else 1


def run():
    sys.exit(main())


if __name__=='__main__':
    run()
