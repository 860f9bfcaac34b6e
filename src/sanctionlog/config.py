from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    rpc_url: str = "https://rpc.ankr.com/eth"
    rpc_timeout: float = 30.0
    rpc_rate_per_second: float = 5.0
    rpc_max_attempts: int = 1  # 1 = single attempt, no retries
    max_concurrency: int = 4
    max_address_array_length: int = 5000
    output_path: str = "sanction_events.json"
    debug: bool = False

    class Config:
        env_prefix = "SANCTIONLOG_"
        env_file = ".env"



settings = Settings()
