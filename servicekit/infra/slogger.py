# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

import logging


"""统一日志出口

日志初始化由 servicekit.common.logging.setup_logging() 负责，且只在进程启动时做一次。
这里仅返回一个命名 logger，作为错误转换 / 中间件 / server 的默认 logger。
"""


slogger = logging.getLogger("servicekit")
