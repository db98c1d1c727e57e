"""GBK -> UTF-8 批量编码迁移工具"""
__version__='0.3.0'
