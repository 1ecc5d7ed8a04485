"""通用工具：日志、配置加载、JSON与航点导出"""
