import os
import yaml
import keyring

APP_VERSION = "1.0.0"
KEYRING_SERVICE = "volumelog"


class YamlConfig:
    """Settings file of the volume log.

    With ``ENCRYPT_SETTINGS=1`` the hosted store API key is kept in the OS
    keyring and the file only records ``store_api_key: true``.
    """

    SECRET_KEYS = ("store_api_key",)

    def __init__(self, path: str = "settings.yaml", service: str = KEYRING_SERVICE) -> None:
        self.path = path
        self.service = service
        self.use_keyring = os.environ.get("ENCRYPT_SETTINGS") == "1"

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a settings mapping")
        if self.use_keyring:
            self._restore_secrets(data)
        return data

    def save(self, data: dict) -> None:
        out = dict(data)
        if self.use_keyring:
            self._stash_secrets(out)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f, allow_unicode=True)

    def _restore_secrets(self, data: dict) -> None:
        for key in self.SECRET_KEYS:
            if key not in data:
                continue
            secret = keyring.get_password(self.service, key)
            if secret is None:
                # placeholder without a keyring entry, treat as unset
                data.pop(key)
            else:
                data[key] = secret

    def _stash_secrets(self, data: dict) -> None:
        for key in self.SECRET_KEYS:
            if data.get(key):
                keyring.set_password(self.service, key, str(data[key]))
                data[key] = True
