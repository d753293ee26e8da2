"""
转换异常：在批处理边界按文件捕获，转为带文件名的错误信息
"""


class ConversionError(Exception):
    """所有转换错误的基类"""


class UnsupportedFormatError(ConversionError):
    """没有可用的提取策略，字节级兜底也无法输出可读内容"""


class ExtractionFailedError(ConversionError):
    """第三方解码器（docx / xlsx / pdf / zip）执行失败"""
