from . import classify, detect, convert, policy

__all__=['classify','detect','convert','policy']
