from __future__ import annotations

from typing import Dict, Iterable, Optional

from exposure_engine.models.experiment import UserContext

# unit_id 的别名 new_unit_id 写入扩展字段时使用的 key
NEW_ID_KEY = "new_id"


def extra_data_from_user_ctx(user_ctx: UserContext) -> Optional[Dict[str, str]]:
    """
    扩展字段（结构化上报）

    new_id 先写入，expanded_data 后写入：expanded_data 自带 new_id 时覆盖别名。
    没有任何扩展信息时返回 None。
    """
    if not user_ctx.expanded_data and not user_ctx.new_unit_id:
        return None
    extra: Dict[str, str] = {}
    if user_ctx.new_unit_id:
        extra[NEW_ID_KEY] = user_ctx.new_unit_id
    extra.update(user_ctx.expanded_data)
    return extra


def marshal_expanded_data(user_ctx: UserContext) -> str:
    """
    扩展字段（按行上报）：key 排序后拼成 ``k1=v1;k2=v2``

    key/value 中的 ``=`` 与 ``;`` 不做转义。
    """
    extra = extra_data_from_user_ctx(user_ctx)
    if not extra:
        return ""
    return ";".join(f"{key}={extra[key]}" for key in sorted(extra))


def int_list_join(elems: Iterable[int], sep: str) -> str:
    return sep.join(str(int(e)) for e in elems)


def data_as_text(data: bytes) -> str:
    """
    配置取值转成上报用的字符串

    按 UTF-8 解码，非法字节替换为 U+FFFD，原始字节不会原样保留。
    """
    return data.decode("utf-8", errors="replace")
