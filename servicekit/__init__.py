# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""Web 服务通用辅助：错误响应转换 / CORS + 请求日志中间件 / 优雅停机 / OpenAPI 导出"""

__version__ = "0.3.0"
