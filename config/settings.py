import os


def env_bool(key, default=False):
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes", "on")


def load_settings() -> dict:
    """Collect application settings from the environment.

    ``MEMBERS`` holds the seed for the default member directory, either as a
    JSON array string or (when passed programmatically) a list of dicts.
    """
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev"),
        "LOGIN_LINK": os.getenv("LOGIN_LINK", "/Security/login"),
        "CHANGE_PASSWORD_URL": os.getenv("CHANGE_PASSWORD_URL", "/Security/changepassword"),
        # Empty means "not configured"; the redirect procedure falls through.
        "DEFAULT_LOGIN_DEST": os.getenv("DEFAULT_LOGIN_DEST") or None,
        "BACKURL_ALLOW_SAME_ORIGIN": env_bool("BACKURL_ALLOW_SAME_ORIGIN"),
        "LOCALE": os.getenv("LOCALE", "en_US"),
        "MEMBERS": os.getenv("MEMBERS", ""),
        "MEMBERS_FILE": os.getenv("MEMBERS_FILE", ""),
    }
