from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient


async def mongo_healthcheck(client: AsyncIOMotorClient) -> bool:
    try:
        await client.admin.command("ping")
        return True
    except Exception:
        return False
