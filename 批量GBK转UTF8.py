# -*- coding: utf-8 -*-
"""
GBK 转 UTF-8 批量编码迁移
=========================
直接运行即扫描当前目录 (默认 .c/.h), 参数与 `python -m gbk2utf8` 相同:
  python 批量GBK转UTF8.py -d ./src -e c,h,cpp -i -b
  python 批量GBK转UTF8.py --gui
"""
import os
import sys

# 兼容直接脚本运行 (未安装包时)
base_dir = os.path.dirname(os.path.abspath(__file__))
if base_dir not in sys.path:
	sys.path.insert(0, base_dir)

from gbk2utf8.cli import main


if __name__ == '__main__':
	code = main(sys.argv[1:])
	if sys.stdin.isatty() and getattr(sys, 'frozen', False):
		# 打包为 exe 双击运行时保留窗口
		input('\n按回车键退出...')
	sys.exit(code)
