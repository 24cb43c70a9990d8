import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HttpCfg(BaseModel):
    user_agent: str = Field(default="watchscout/0.1")
    timeout_s: int = Field(default=20, ge=1, le=120)
    # przerwa między kolejnymi lokalizacjami (grzeczność wobec serwisu)
    sleep_s: float = Field(default=0.099, ge=0.0, le=60.0)
    http_proxy: str | None = None
    https_proxy: str | None = None

class IoCfg(BaseModel):
    out_dir: Path = Path(".")

class LogCfg(BaseModel):
    level: str = Field(default="INFO")

class DefaultsCfg(BaseModel):
    filters: str = "BUY,CINEMA,FAST,RENT"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)
    http: HttpCfg = HttpCfg()
    io: IoCfg = IoCfg()
    log: LogCfg = LogCfg()
    defaults: DefaultsCfg = DefaultsCfg()

def ensure_dirs(cfg: Settings) -> None:
    cfg.io.out_dir.mkdir(parents=True, exist_ok=True)

def load_settings() -> Settings:
    s = Settings(
        http=HttpCfg(
            user_agent=os.getenv("USER_AGENT", HttpCfg().user_agent),
            timeout_s=int(os.getenv("HTTP_TIMEOUT_S", HttpCfg().timeout_s)),
            sleep_s=float(os.getenv("REQUEST_SLEEP_S", HttpCfg().sleep_s)),
            http_proxy=os.getenv("HTTP_PROXY") or None,
            https_proxy=os.getenv("HTTPS_PROXY") or None,
        ),
        io=IoCfg(out_dir=Path(os.getenv("OUT_DIR", IoCfg().out_dir))),
        log=LogCfg(level=os.getenv("LOG_LEVEL", LogCfg().level)),
        defaults=DefaultsCfg(filters=os.getenv("DEFAULT_FILTERS", DefaultsCfg().filters)),
    )
    ensure_dirs(s)
    return s
