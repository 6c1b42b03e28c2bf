PROJECT_NAME = "OpsAgent"
API_V1_STR = "/api/v1"
VERSION = "1.4.0"
