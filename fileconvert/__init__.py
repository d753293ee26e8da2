"""
fileconvert：任意文件转纯文本，附带启发式文本分析
"""

__version__ = "0.1.0"
