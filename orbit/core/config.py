from os import getenv


class Settings:
    DATABASE_URL = getenv("DATABASE_URL")

    # Auth déléguée à Supabase, on vérifie juste les JWT qu'il émet
    SUPABASE_URL = getenv("SUPABASE_URL")
    SUPABASE_JWT_SECRET = getenv("SUPABASE_JWT_SECRET")
    SUPABASE_JWT_AUDIENCE = getenv("SUPABASE_JWT_AUDIENCE", "authenticated")

    # Sans clé, l'adaptateur IA renvoie les réponses statiques
    OPENAI_API_KEY = getenv("OPENAI_API_KEY")
    OPENAI_BASE_URL = getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    OPENAI_MODEL = getenv("OPENAI_MODEL", "gpt-4o")
    LLM_TIMEOUT = int(getenv("LLM_TIMEOUT", "30"))  # secondes

    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = getenv("CORS_ORIGINS", "*")

    REQUIRED = ("DATABASE_URL", "SUPABASE_URL", "SUPABASE_JWT_SECRET")

    def check_required(self):
        """Lève une erreur au démarrage si la config DB/auth manque"""
        missing = [name for name in self.REQUIRED if not getattr(self, name)]
        if missing:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

    @property
    def supabase_issuer(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1"


settings = Settings()
