from typing import Any, Dict, List, Optional

from ..client import SkylightClient
from ..errors import ParseError
from ..models import Resource, parse_resource, parse_resources

REWARDS_PATH = "/api/frames/{frame_id}/rewards"

_UPDATABLE = ("name", "point_value", "description", "emoji_icon", "respawn_on_redemption")


async def get_rewards(
    client: SkylightClient, redeemed_at_min: Optional[str] = None
) -> List[Resource]:
    payload = await client.get(REWARDS_PATH, {"redeemed_at_min": redeemed_at_min})
    return parse_resources(Resource, payload)


async def get_reward_points(client: SkylightClient) -> List[Resource]:
    payload = await client.get("/api/frames/{frame_id}/reward_points")
    return parse_resources(Resource, payload)


async def create_reward(
    client: SkylightClient,
    name: str,
    point_value: float,
    description: Optional[str] = None,
    emoji_icon: Optional[str] = None,
    category_ids: Optional[List[str]] = None,
    respawn_on_redemption: bool = False,
) -> Resource:
    body: Dict[str, Any] = {
        "name": name,
        "point_value": point_value,
        "respawn_on_redemption": respawn_on_redemption,
    }
    if description is not None:
        body["description"] = description
    if emoji_icon is not None:
        body["emoji_icon"] = emoji_icon
    if category_ids:
        body["category_ids"] = category_ids

    payload = await client.post(REWARDS_PATH, body)
    # with category_ids the API answers with one reward per category
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        rewards = parse_resources(Resource, payload)
        if not rewards:
            raise ParseError("Reward creation returned no rewards")
        return rewards[0]
    return parse_resource(Resource, payload)


async def update_reward(
    client: SkylightClient, reward_id: str, changes: Dict[str, Any]
) -> Resource:
    """PATCH the reward. A category is assigned with singular ``category_id`` here."""
    body = {key: changes[key] for key in _UPDATABLE if key in changes}
    if "category_id" in changes:
        body["category_id"] = changes["category_id"]
    payload = await client.patch(f"{REWARDS_PATH}/{reward_id}", body)
    return parse_resource(Resource, payload)


async def delete_reward(client: SkylightClient, reward_id: str) -> None:
    await client.delete(f"{REWARDS_PATH}/{reward_id}")


async def redeem_reward(
    client: SkylightClient, reward_id: str, category_id: Optional[str] = None
) -> Resource:
    body = {"category_id": category_id} if category_id else {}
    payload = await client.post(f"{REWARDS_PATH}/{reward_id}/redeem", body)
    return parse_resource(Resource, payload)


async def unredeem_reward(client: SkylightClient, reward_id: str) -> Resource:
    payload = await client.post(f"{REWARDS_PATH}/{reward_id}/unredeem", {})
    return parse_resource(Resource, payload)
