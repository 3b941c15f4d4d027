import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from boto3.session import Session

from ..config import build_session
from ..models import AwsIdentity, AwsIdentityError

logger = logging.getLogger(__name__)


def get_current_aws_identity(
    profile: Optional[str] = None,
    region: Optional[str] = None,
    session: Optional[Session] = None,
) -> AwsIdentity:
    """
    Descobre a identidade AWS atual via STS (Security Token Service).

    Também fecha a região efetiva: é esse objeto que crawler/collector/applier recebem.
    """
    session = session or build_session(profile=profile, region=region)
    sts = session.client("sts")

    try:
        resp = sts.get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise AwsIdentityError(f"Não foi possível obter a identidade AWS atual: {e}") from e

    identity = AwsIdentity(
        account=resp["Account"],
        arn=resp["Arn"],
        user_id=resp["UserId"],
        region=session.region_name,
        profile=profile,
    )
    logger.debug("Identidade AWS: %s (%s)", identity.arn, identity.region)
    return identity
