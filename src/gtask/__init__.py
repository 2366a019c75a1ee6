"""
gtask

Command-line client for Google Tasks. Tasks are addressed by their printed
number (`gtask done 3`) or by list letter and number (`gtask done b2`).
"""

__version__ = '0.1.0'
