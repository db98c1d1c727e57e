from __future__ import annotations
import os, shutil, tempfile, logging
from dataclasses import dataclass
from typing import Optional
from ..config import Config
from ..utils import ErrorKind, backup_path_for

logger=logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionOutcome:
    success:bool
    backup_path:Optional[str]=None
    error:Optional[ErrorKind]=None
    message:str='OK'


def _fail(kind:ErrorKind, message:str, backup_path:Optional[str]=None)->ConversionOutcome:
    return ConversionOutcome(False,backup_path,kind,message)


def write_replace(path:str, payload:bytes):
    """覆盖写入 path 的内容。
    符号链接先解析到真实文件; 普通文件先写同目录临时文件再 os.replace, 中途失败不会留下截断的原文件;
    存在多个硬链接时直接原地写入, 保持各链接指向同一份内容。
    """
    target=os.path.realpath(path)
    st=os.stat(target)
    if st.st_nlink>1:
        with open(target,'wb') as f:
            f.write(payload)
        return
    fd,tmp=tempfile.mkstemp(prefix='.'+os.path.basename(target)+'.',suffix='.tmp',dir=os.path.dirname(target))
    try:
        with os.fdopen(fd,'wb') as f:
            f.write(payload)
        shutil.copymode(target,tmp)
        if hasattr(os,'chown'):
            try:
                os.chown(tmp,st.st_uid,st.st_gid)
            except PermissionError:
                logger.debug('无法保留属主: %s', target)
        os.replace(tmp,target)
    except BaseException:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise


def convert(path:str, config:Config)->ConversionOutcome:
    """GBK -> UTF-8 原地转换。
    顺序: 读取 -> 严格 GBK 解码 -> (备份) -> 覆盖写入; 任一步失败原文件保持不变。
    """
    try:
        with open(path,'rb') as f:
            raw=f.read()
    except OSError as e:
        return _fail(ErrorKind.IO,f'读取失败: {e}')

    try:
        payload=raw.decode('gbk',errors='strict').encode('utf-8')
    except UnicodeDecodeError as e:
        return _fail(ErrorKind.DECODE,f'GBK 解码失败: 位置 {e.start}, {e.reason}')

    bak=None
    if config.backup:
        bak=backup_path_for(path)
        try:
            shutil.copy2(path,bak)
        except OSError as e:
            return _fail(ErrorKind.BACKUP,f'备份失败: {e}')
        logger.debug('已备份 %s -> %s', path, bak)

    try:
        write_replace(path,payload)
    except OSError as e:
        return _fail(ErrorKind.IO,f'写入失败: {e}',bak)
    return ConversionOutcome(True,bak)
