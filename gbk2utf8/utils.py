from __future__ import annotations
import os, logging
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple
from .config import BACKUP_SUFFIX

logger=logging.getLogger(__name__)


class ErrorKind(Enum):
    IO='IO'
    DECODE='DECODE'
    BACKUP='BACKUP'
    DIRECTORY='DIRECTORY'


class WalkError(Exception):
    """根目录无法遍历 (不存在/无权限/不是目录), 整个运行终止"""


class ErrorLedger:
    """路径 -> (错误类型, 信息). 遍历过程中顺序累积, 不会中断遍历"""
    def __init__(self):
        self._errors:Dict[str,Tuple[ErrorKind,str]]={}

    def record(self, path:str, kind:ErrorKind, message:str):
        logger.debug('记录失败 %s [%s] %s', path, kind.value, message)
        self._errors[path]=(kind,message)

    def get(self, path:str)->Optional[Tuple[ErrorKind,str]]:
        return self._errors.get(path)

    def items(self)->Iterable[Tuple[str,Tuple[ErrorKind,str]]]:
        return self._errors.items()

    def __contains__(self, path)->bool:
        return path in self._errors

    def __len__(self)->int:
        return len(self._errors)

    def __bool__(self)->bool:
        return bool(self._errors)


def norm_ext(path:str)->str:
    return os.path.splitext(path)[1].lower().lstrip('.')


def backup_path_for(path:str)->str:
    """foo.c -> foo.c.bak"""
    return path+BACKUP_SUFFIX


def _list_dir(path:str)->list:
    with os.scandir(path) as it:
        return sorted(it,key=lambda e:e.name)


def iter_sources(root:str, accept:Callable[[str],bool], ledger:ErrorLedger)->Iterator[str]:
    """深度优先遍历 root, 产出扩展名匹配的文件。
    使用显式目录栈代替递归; 子目录读取失败记入 ledger 后继续处理其余目录,
    只有根目录本身无法读取时抛出 WalkError。符号链接目录不跟随, 避免环。
    """
    if not os.path.isdir(root):
        raise WalkError(f'目录不存在或不是目录: {root}')
    stack=[root]
    while stack:
        dirpath=stack.pop()
        try:
            entries=_list_dir(dirpath)
        except OSError as e:
            if dirpath==root:
                raise WalkError(f'无法读取目录 {root}: {e}') from e
            logger.warning('跳过无法读取的目录 %s: %s', dirpath, e)
            ledger.record(dirpath,ErrorKind.DIRECTORY,str(e))
            continue
        subdirs=[]
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(entry.path); continue
                wanted=entry.is_file() and accept(norm_ext(entry.name))
            except OSError as e:
                ledger.record(entry.path,ErrorKind.IO,str(e)); continue
            if wanted:
                yield entry.path
        # 逆序入栈, 保证按名称顺序深度优先
        stack.extend(reversed(subdirs))
