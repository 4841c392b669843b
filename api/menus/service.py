"""
Site menu visibility and order.
"""

from __future__ import annotations

import logging

from core.schemas import now_ms

from . import repository, schemas

logger = logging.getLogger(__name__)

DEFAULT_MENUS = (
    {"menu_key": "questions", "menu_name": "質問・回答", "is_visible": True, "order": 1,
     "description": "議会質問と回答を閲覧できます"},
    {"menu_key": "members", "menu_name": "議員一覧", "is_visible": True, "order": 2,
     "description": "市議会議員の一覧と詳細情報"},
    {"menu_key": "rankings", "menu_name": "統計", "is_visible": True, "order": 3,
     "description": "議員の活動統計"},
    {"menu_key": "news", "menu_name": "お知らせ", "is_visible": True, "order": 4,
     "description": "サイトからのお知らせ"},
    {"menu_key": "externalArticles", "menu_name": "議員ブログ・SNS", "is_visible": False, "order": 5,
     "description": "議員のブログやSNS投稿"},
    {"menu_key": "faq", "menu_name": "よくある質問", "is_visible": True, "order": 6,
     "description": "よくある質問と回答"},
    {"menu_key": "contact", "menu_name": "お問い合わせ", "is_visible": True, "order": 7,
     "description": "お問い合わせフォーム"},
)


async def menu_settings() -> list[schemas.MenuSetting]:
    rows = await repository.list_settings() or list(DEFAULT_MENUS)
    return [schemas.MenuSetting.model_validate(r) for r in rows]


async def visible_menus() -> list[schemas.MenuSetting]:
    rows = await repository.list_settings(visible_only=True) or [m for m in DEFAULT_MENUS if m["is_visible"]]
    return [schemas.MenuSetting.model_validate(r) for r in rows]


async def update_setting(payload: schemas.UpdateMenuSettingRequest, *, admin_user_id: int) -> schemas.MenuSetting:
    row = await repository.upsert_setting(
        payload.model_dump(exclude_unset=True),
        updated_by=admin_user_id,
        updated_at=now_ms(),
    )
    logger.info("menu_setting_saved menu_key=%s by=%s", payload.menu_key, admin_user_id)
    return schemas.MenuSetting.model_validate(row)


async def update_settings(payload: schemas.BulkMenuSettingsRequest, *, admin_user_id: int) -> list[schemas.MenuSetting]:
    rows = await repository.upsert_many(
        [s.model_dump() for s in payload.settings],
        updated_by=admin_user_id,
        updated_at=now_ms(),
    )
    logger.info("menu_settings_saved count=%s by=%s", len(rows), admin_user_id)
    return [schemas.MenuSetting.model_validate(r) for r in rows]
