from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class DashboardContext:
    store: Any
    session: Any
    settings: Dict[str, Any] = field(default_factory=dict)

    @property
    def user(self):
        return self.session.current_user()

    @property
    def user_id(self):
        return self.session.current_user_id()

    def get(self, key, default=None):
        return self.settings.get(key, default)

    def __getitem__(self, key):
        return self.settings[key]
