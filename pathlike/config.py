from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage settings
    local_store_path: str = "data/pathlike.json"
    storage_key_prefix: str = "pathlike_"

    # Path tracking limits
    max_path_length: int = 100
    max_browse_history: int = 200

    # Ledger settings
    ledger_max_path_length: int = 20  # structural limit of the like action
    contract_account: str = "polaris"
    like_action_name: str = "like"
    signer_timeout_seconds: float = 30.0
    # Only for development: lets identifiers hashed without a digest facility reach the ledger
    allow_fallback_hash: bool = False

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
