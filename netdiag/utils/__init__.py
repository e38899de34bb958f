"""
工具包

提供探测输出解析器和终端输出格式化
"""
