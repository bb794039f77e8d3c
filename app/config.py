# 服务配置
import os

# 日志级别
LOG_LEVEL = os.getenv("GRADEBOOK_LOG_LEVEL", "INFO")

# 单科统计（平均分、中位数、标准差、方差、四分位距）的舍入位数
DECIMAL_PLACES = int(os.getenv("GRADEBOOK_DECIMAL_PLACES", "1"))

# 单科分数分布的默认间隔
DEFAULT_INTERVAL = int(os.getenv("GRADEBOOK_DEFAULT_INTERVAL", "10"))

# 成绩CSV文件编码
CSV_ENCODING = os.getenv("GRADEBOOK_CSV_ENCODING", "utf-8")

# 服务监听地址
API_HOST = os.getenv("GRADEBOOK_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("GRADEBOOK_API_PORT", "8000"))
