import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Settings:
    # App
    APP_ENV: str = os.getenv("APP_ENV", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Firebase
    FIREBASE_PROJECT_ID: str | None = os.getenv("FIREBASE_PROJECT_ID")
    FIREBASE_CLIENT_EMAIL: str | None = os.getenv("FIREBASE_CLIENT_EMAIL")
    FIREBASE_PRIVATE_KEY: str | None = os.getenv("FIREBASE_PRIVATE_KEY")

    # Deadline das notificações disparadas por mutação do menu (0 desliga)
    NOTIFY_TIMEOUT: float = float(os.getenv("NOTIFY_TIMEOUT", "10"))

    @property
    def is_development(self) -> bool:
        return self.APP_ENV.lower() == "development"

    def firebase_raw(self) -> dict:
        return {
            "project_id": self.FIREBASE_PROJECT_ID,
            "client_email": self.FIREBASE_CLIENT_EMAIL,
            "private_key": self.FIREBASE_PRIVATE_KEY,
        }

settings = Settings()
