from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AwsIdentity:
    """
    Contexto AWS resolvido uma vez por execução (conta + região + profile)
    e repassado explicitamente para crawler, collector e applier.
    """

    account: str
    arn: str
    user_id: str
    region: Optional[str]
    profile: Optional[str]

    def template_context(self) -> Dict[str, Any]:
        return {"account": self.account, "region": self.region}


class AwsIdentityError(RuntimeError):
    pass
