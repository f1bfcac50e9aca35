"""End-to-end tool calls through FastMCP against the fake API."""

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from skylight_mcp.server import build_server

from .conftest import FRAME_ID, reply

BASE = f"/api/frames/{FRAME_ID}"

EXPECTED_TOOLS = {
    "get_calendar_events", "get_source_calendars", "create_calendar_event",
    "update_calendar_event", "delete_calendar_event",
    "get_chores", "create_chore", "update_chore", "delete_chore",
    "get_lists", "get_list_items", "create_list", "update_list", "delete_list",
    "create_list_item", "update_list_item", "delete_list_item",
    "create_task", "get_tasks", "update_task", "delete_task",
    "get_rewards", "get_reward_points", "create_reward", "update_reward",
    "delete_reward", "redeem_reward", "unredeem_reward",
    "get_meal_categories", "get_recipes", "get_recipe", "create_recipe", "update_recipe",
    "delete_recipe", "add_recipe_to_grocery_list", "get_meal_sittings",
    "create_meal_sitting", "update_meal_sitting", "delete_meal_sitting",
    "get_family_members", "get_frame_info", "get_devices",
    "get_albums", "get_avatars", "get_colors",
}

CATEGORIES = {
    "data": [
        {"type": "category", "id": "cat1", "attributes": {"label": "Dad", "linked_to_profile": True}},
        {"type": "category", "id": "cat2", "attributes": {"label": "Emma", "linked_to_profile": True}},
    ]
}


def text_of(result) -> str:
    content = result[0] if isinstance(result, tuple) else result
    return "\n".join(block.text for block in content)


async def call(mcp, name, **params):
    # tools without inputs ignore the extra argument
    return text_of(await mcp.call_tool(name, {"params": params}))


@pytest.fixture
def mcp(client):
    return build_server(client)


@pytest.mark.asyncio
async def test_every_tool_is_registered(mcp):
    names = {tool.name for tool in await mcp.list_tools()}
    assert names == EXPECTED_TOOLS


@pytest.mark.asyncio
async def test_read_only_tools_are_annotated(mcp):
    tools = {tool.name: tool for tool in await mcp.list_tools()}
    assert tools["get_chores"].annotations.readOnlyHint is True
    assert tools["delete_chore"].annotations.destructiveHint is True


class TestCalendarTools:
    @pytest.mark.asyncio
    async def test_lists_events(self, api, mcp):
        api.add(
            "GET",
            f"{BASE}/calendar_events",
            reply(200, {"data": [{"type": "calendar_event", "id": "e1", "attributes": {"summary": "Recital", "location": None}}]}),
        )

        text = await call(mcp, "get_calendar_events", date="2025-06-15")

        assert text.startswith("Calendar events for Sun, Jun 15:")
        assert "- Event (ID: e1)" in text
        assert "summary: Recital" in text
        assert "location" not in text
        assert api.calls("GET", f"{BASE}/calendar_events")[0].url.params["date_max"] == "2025-06-16"

    @pytest.mark.asyncio
    async def test_no_events(self, api, mcp):
        api.add("GET", f"{BASE}/calendar_events", reply(200, {"data": []}))
        text = await call(mcp, "get_calendar_events", date="2025-06-15", date_end="2025-06-17")
        assert text == "No calendar events found for Sun, Jun 15 to Tue, Jun 17."

    @pytest.mark.asyncio
    async def test_update_sends_only_provided_fields(self, api, mcp):
        api.add("PUT", f"{BASE}/calendar_events/e1", reply(200, {"data": {"type": "calendar_event", "id": "e1"}}))

        await call(mcp, "update_calendar_event", event_id="e1", location=None, summary="Moved")

        assert api.last_json("PUT", f"{BASE}/calendar_events/e1") == {"summary": "Moved", "location": None}


class TestChoreTools:
    @pytest.mark.asyncio
    async def test_create_resolves_assignee_and_recurrence(self, api, mcp):
        api.add("GET", f"{BASE}/categories", reply(200, CATEGORIES))
        api.add(
            "POST",
            f"{BASE}/chores/create_multiple",
            reply(200, {"data": [{"type": "chore", "id": "c1", "attributes": {
                "summary": "Trash", "start": "2025-06-15", "start_time": "14:30", "recurring": True}}]}),
        )

        text = await call(
            mcp, "create_chore", summary="Trash", date="2025-06-15", time="2:30 PM",
            assignee="emma", recurring=True, recurrence_pattern="weekdays",
        )

        body = api.last_json("POST", f"{BASE}/chores/create_multiple")
        assert body["category_ids"] == ["cat2"]
        assert body["start_time"] == "14:30"
        assert body["recurrence_set"] == ["RRULE:FREQ=WEEKLY;BYDAY=MO,TU,WE,TH,FR"]
        assert 'Created chore: "Trash"' in text
        assert "Sun, Jun 15 at 14:30" in text
        assert "Assigned to: emma" in text

    @pytest.mark.asyncio
    async def test_unknown_assignee_is_an_error(self, api, mcp):
        api.add("GET", f"{BASE}/categories", reply(200, CATEGORIES))

        with pytest.raises(ToolError, match='Could not find a family member named "Grandpa"'):
            await call(mcp, "create_chore", summary="Trash", date="2025-06-15", assignee="Grandpa")

        assert api.calls("POST", f"{BASE}/chores/create_multiple") == []

    @pytest.mark.asyncio
    async def test_get_filters_by_assignee_and_status(self, api, mcp):
        def chore(cid, summary, status, cat):
            return {
                "type": "chore", "id": cid,
                "attributes": {"summary": summary, "status": status, "start": "2025-06-15"},
                "relationships": {"category": {"data": {"type": "category", "id": cat}}},
            }

        api.add(
            "GET",
            f"{BASE}/chores",
            reply(200, {
                "data": [
                    chore("1", "Dishes", "pending", "cat1"),
                    chore("2", "Homework", "pending", "cat2"),
                    chore("3", "Laundry", "completed", "cat2"),
                ],
                "included": CATEGORIES["data"],
            }),
        )

        text = await call(mcp, "get_chores", date="2025-06-15", assignee="Emma")

        assert "Homework" in text
        assert "Dishes" not in text
        assert "Laundry" not in text
        assert "Assigned to: Emma" in text
        params = api.calls("GET", f"{BASE}/chores")[0].url.params
        assert params["before"] == "2025-06-22"

    @pytest.mark.asyncio
    async def test_update_unassigns_with_null(self, api, mcp):
        api.add("PUT", f"{BASE}/chores/c1", reply(200, {"data": {"type": "chore", "id": "c1", "attributes": {"summary": "Dishes"}}}))

        text = await call(mcp, "update_chore", chore_id="c1", assignee=None, status="completed")

        assert api.last_json("PUT", f"{BASE}/chores/c1") == {"status": "completed", "category_id": None}
        assert text == 'Updated chore: "Dishes" (marked complete)'


class TestListTools:
    @pytest.mark.asyncio
    async def test_default_grocery_list_grouped_by_section(self, api, mcp):
        api.add("GET", f"{BASE}/lists", reply(200, {"data": [
            {"type": "list", "id": "l1", "attributes": {"label": "Groceries", "kind": "shopping", "default_grocery_list": True}},
        ]}))
        api.add("GET", f"{BASE}/lists/l1", reply(200, {
            "data": {"type": "list", "id": "l1", "attributes": {"label": "Groceries", "kind": "shopping"}},
            "included": [
                {"type": "list_item", "id": "i1", "attributes": {"label": "Milk", "status": "pending", "section": "Dairy"}},
                {"type": "list_item", "id": "i2", "attributes": {"label": "Bread", "status": "pending"}},
                {"type": "list_item", "id": "i3", "attributes": {"label": "Eggs", "status": "completed", "section": "Dairy"}},
            ],
        }))

        text = await call(mcp, "get_list_items")

        assert text == "Groceries:\n[ ] Bread\n\nDairy:\n[ ] Milk"

    @pytest.mark.asyncio
    async def test_add_item_without_any_grocery_list(self, api, mcp):
        api.add("GET", f"{BASE}/lists", reply(200, {"data": []}))
        with pytest.raises(ToolError, match="No default grocery list found"):
            await call(mcp, "create_list_item", label="Milk")

    @pytest.mark.asyncio
    async def test_update_requires_a_selector(self, mcp):
        with pytest.raises(ToolError, match="Either list_id or list_name is required"):
            await call(mcp, "update_list", label="Renamed")

    @pytest.mark.asyncio
    async def test_add_item_by_list_name(self, api, mcp):
        api.add("GET", f"{BASE}/lists", reply(200, {"data": [
            {"type": "list", "id": "l2", "attributes": {"label": "Hardware Store", "kind": "shopping"}},
        ]}))
        api.add("POST", f"{BASE}/lists/l2/list_items", reply(201, {"data": {"type": "list_item", "id": "i9", "attributes": {"label": "Nails"}}}))

        text = await call(mcp, "create_list_item", label="Nails", list_name="hardware", section="Tools")

        assert text == 'Added "Nails" to Hardware Store in section "Tools"'


class TestErrorFlagging:
    @pytest.mark.asyncio
    async def test_not_found_is_flagged(self, api, mcp):
        with pytest.raises(ToolError, match="Not Found"):
            await call(mcp, "delete_chore", chore_id="missing")

    @pytest.mark.asyncio
    async def test_rate_limit_mentions_wait(self, api, mcp):
        api.add("GET", f"{BASE}/rewards", reply(429, headers={"Retry-After": "30"}))
        with pytest.raises(ToolError, match="Wait 30 seconds"):
            await call(mcp, "get_rewards")

    @pytest.mark.asyncio
    async def test_invalid_arguments_are_rejected(self, mcp):
        with pytest.raises(ToolError):
            await call(mcp, "get_chores", status="someday")


class TestOtherTools:
    @pytest.mark.asyncio
    async def test_task_box_round(self, api, mcp):
        api.add("POST", f"{BASE}/task_box/items", reply(201, {"data": {
            "type": "task_box_item", "id": "t1", "attributes": {"summary": "Clean garage", "emoji_icon": "🧹"}}}))

        text = await call(mcp, "create_task", summary="Clean garage", emoji="🧹")

        assert 'Created task: "Clean garage"' in text
        assert "Emoji: 🧹" in text
        body = api.last_json("POST", f"{BASE}/task_box/items")
        assert body["data"]["attributes"]["emoji_icon"] == "🧹"

    @pytest.mark.asyncio
    async def test_redeem_for_family_member(self, api, mcp):
        api.add("GET", f"{BASE}/categories", reply(200, CATEGORIES))
        api.add("POST", f"{BASE}/rewards/r1/redeem", reply(200, {"data": {"type": "reward", "id": "r1"}}))

        text = await call(mcp, "redeem_reward", reward_id="r1", assignee="Dad")

        assert text == "Redeemed reward (ID: r1) for Dad"
        assert api.last_json("POST", f"{BASE}/rewards/r1/redeem") == {"category_id": "cat1"}

    @pytest.mark.asyncio
    async def test_family_members_lists_only_linked_profiles(self, api, mcp):
        api.add("GET", f"{BASE}/categories", reply(200, {"data": CATEGORIES["data"] + [
            {"type": "category", "id": "p1", "attributes": {"label": "Pets", "linked_to_profile": False}},
        ]}))

        text = await call(mcp, "get_family_members")

        assert text.startswith("Family members:")
        assert "Emma (ID: cat2)" in text
        assert "Pets" not in text
        assert len(api.calls("GET", f"{BASE}/categories")) == 1

    @pytest.mark.asyncio
    async def test_family_members_fall_back_to_categories(self, api, mcp):
        api.add("GET", f"{BASE}/categories", reply(200, {"data": [
            {"type": "category", "id": "p1", "attributes": {"label": "Pets", "color": "#00ff00"}},
        ]}))

        text = await call(mcp, "get_family_members")

        assert text.startswith("Categories (no linked profiles found):")
        assert "Color: #00ff00" in text

    @pytest.mark.asyncio
    async def test_frame_info(self, api, mcp):
        api.add("GET", BASE, reply(200, {"data": {"type": "frame", "id": FRAME_ID, "attributes": {"name": "Home"}}}))

        text = await call(mcp, "get_frame_info")

        assert f"Frame ID: {FRAME_ID}" in text
        assert 'name: "Home"' in text

    @pytest.mark.asyncio
    async def test_frame_info_shows_subscription_after_login(self, api, login_client):
        api.add("GET", BASE, reply(200, {"data": {"type": "frame", "id": FRAME_ID}}))
        mcp = build_server(login_client)

        text = await call(mcp, "get_frame_info")

        assert "Subscription: plus (Plus features: Yes)" in text

    @pytest.mark.asyncio
    async def test_meal_sitting_update_maps_recipe(self, api, mcp):
        api.add("PATCH", f"{BASE}/meals/sittings/s1", reply(200, {"data": {"type": "meal_sitting", "id": "s1"}}))

        await call(mcp, "update_meal_sitting", sitting_id="s1", recipe_id="r2", date="2025-06-20")

        assert api.last_json("PATCH", f"{BASE}/meals/sittings/s1") == {
            "date": "2025-06-20",
            "meal_recipe_id": "r2",
        }
