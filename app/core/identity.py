import structlog
from typing import List, Optional
from jose import JWTError, jwt

from app.core.exceptions import UnauthorizedException

"身份认证客户端 - 校验会话令牌并解析用户ID"

logger = structlog.get_logger()


class IdentityClient:
    """会话令牌(JWT)校验客户端"""

    def __init__(
            self,
            verification_key: Optional[str],
            algorithms: Optional[List[str]] = None,
            issuer: Optional[str] = None,
            audience: Optional[str] = None
    ):
        self.verification_key = verification_key
        self.algorithms = algorithms or ["RS256"]
        self.issuer = issuer
        self.audience = audience

    def resolve_user_id(self, token: str) -> str:
        """从会话令牌中解析调用者的用户ID"""
        if not self.verification_key:
            logger.error("身份认证密钥未配置")
            raise UnauthorizedException("Unauthenticated", error="Identity provider is not configured")

        try:
            payload = jwt.decode(
                token,
                self.verification_key,
                algorithms=self.algorithms,
                issuer=self.issuer,
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.warning("会话令牌校验失败", error=str(e))
            raise UnauthorizedException("Unauthenticated", error="Invalid session token") from e

        user_id = payload.get("sub")
        if not user_id:
            logger.warning("会话令牌缺少用户ID")
            raise UnauthorizedException("Unauthenticated", error="Session token has no subject")

        return user_id
