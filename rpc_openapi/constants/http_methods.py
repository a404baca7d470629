"""HTTP方法常量.

定义过程可以绑定的 HTTP 请求方法,避免魔法字符串.
"""

from typing import ClassVar


class HttpMethod:
    """HTTP方法常量.

    只收录生成文档时支持的方法(RFC 7231 / RFC 5789).
    """

    GET: ClassVar[str] = "GET"           # 查询, 输入走 query
    POST: ClassVar[str] = "POST"         # 创建, 输入走 JSON body
    PUT: ClassVar[str] = "PUT"           # 完整更新
    PATCH: ClassVar[str] = "PATCH"       # 部分更新
    DELETE: ClassVar[str] = "DELETE"     # 删除, 输入走 query

    ALL: ClassVar[tuple[str, ...]] = (GET, POST, PUT, PATCH, DELETE)

    BODY_METHODS: ClassVar[tuple[str, ...]] = (POST, PUT, PATCH)

    @classmethod
    def is_valid(cls, method: str) -> bool:
        """判断是否为受支持的 HTTP 方法."""
        return method.upper() in cls.ALL

    @classmethod
    def has_body(cls, method: str) -> bool:
        """判断该方法的输入是否通过请求体传递.

        Args:
            method: HTTP方法字符串

        Returns:
            bool: POST/PUT/PATCH 返回 True

        """
        return method.upper() in cls.BODY_METHODS


__all__ = ["HttpMethod"]
