from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "gofactory"
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"

    output_root: str = "/data/generated"
    default_package_name: str = "main"

    # When set, template ids listed in remote_template_ids are resolved over HTTP.
    template_service_url: str | None = None
    remote_template_ids: list[str] = ["repository_template", "service_template", "handler_template"]
    template_timeout: float = 30.0

    go_binary: str = "go"
    gofmt_binary: str = "gofmt"
    toolchain_timeout: float = 300.0

    format_code: bool = True
    validate_code: bool = True
    compile_code: bool = True
    # go mod tidy before go build; needs module downloads to be reachable.
    tidy_modules: bool = True
