"""
Howl Backend — /businesses Endpoint Tests
===========================================

What:  End-to-end HTTP tests against a real SQLite database.
How:   httpx AsyncClient over ASGITransport (no server process).
"""

import pytest


class TestListBusinesses:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/businesses")

        assert response.status_code == 200
        assert response.json() == {
            "businesses": [],
            "pageNumber": 1,
            "totalPages": 0,
            "pageSize": 10,
            "totalCount": 0,
            "links": {},
        }

    @pytest.mark.asyncio
    async def test_first_page(self, test_client, seed_businesses):
        await seed_businesses(25)

        response = await test_client.get("/businesses")

        body = response.json()
        assert response.status_code == 200
        assert [b["id"] for b in body["businesses"]] == list(range(1, 11))
        assert body["pageNumber"] == 1
        assert body["totalPages"] == 3
        assert body["totalCount"] == 25
        assert body["links"] == {
            "nextPage": "/businesses?page=2",
            "lastPage": "/businesses?page=3",
        }

    @pytest.mark.asyncio
    async def test_last_page(self, test_client, seed_businesses):
        await seed_businesses(25)

        body = (await test_client.get("/businesses", params={"page": 3})).json()

        assert [b["name"] for b in body["businesses"]] == [f"Business {i}" for i in range(21, 26)]
        assert body["links"] == {
            "prevPage": "/businesses?page=2",
            "firstPage": "/businesses?page=1",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page, expected", [("99", 3), ("0", 1), ("abc", 1)])
    async def test_out_of_range_pages_are_clamped(self, test_client, seed_businesses, page, expected):
        await seed_businesses(25)

        body = (await test_client.get("/businesses", params={"page": page})).json()

        assert body["pageNumber"] == expected


class TestCreateBusiness:

    @pytest.mark.asyncio
    async def test_create_returns_id_and_link(self, test_client, business_body):
        response = await test_client.post("/businesses", json=business_body)

        assert response.status_code == 201
        assert response.json() == {"id": 1, "links": {"business": "/businesses/1"}}

    @pytest.mark.asyncio
    async def test_missing_phone_is_rejected(self, test_client, business_body):
        del business_body["phone"]

        response = await test_client.post("/businesses", json=business_body)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Request body is not a valid business object"
        assert body["details"] == {"missing": ["phone"]}

    @pytest.mark.asyncio
    async def test_object_valued_field_is_400(self, test_client, business_body):
        response = await test_client.post("/businesses", json={**business_body, "name": {"x": 1}})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Request body is not a valid business object"
        assert body["details"] == {"invalid": ["name"]}
        assert (await test_client.get("/businesses")).json()["totalCount"] == 0

    @pytest.mark.asyncio
    async def test_array_valued_optional_field_is_400(self, test_client, business_body):
        response = await test_client.post("/businesses", json={**business_body, "email": ["a@b.c"]})

        assert response.status_code == 400
        assert response.json()["details"] == {"invalid": ["email"]}

    @pytest.mark.asyncio
    async def test_string_in_integer_column_is_400(self, test_client, business_body):
        response = await test_client.post("/businesses", json={**business_body, "ownerid": "1"})

        assert response.status_code == 400
        assert response.json()["details"] == {"invalid": ["ownerid"]}

    @pytest.mark.asyncio
    async def test_unknown_fields_are_not_stored(self, test_client, business_body):
        await test_client.post("/businesses", json={**business_body, "evil": "x", "id": 99})

        business = (await test_client.get("/businesses/1")).json()

        assert "evil" not in business
        assert business["id"] == 1

    @pytest.mark.asyncio
    async def test_non_object_body_is_rejected(self, test_client):
        response = await test_client.post("/businesses", json=["not", "a", "business"])

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_json_is_rejected(self, test_client):
        response = await test_client.post(
            "/businesses",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Request body is not valid JSON"


class TestGetBusiness:

    @pytest.mark.asyncio
    async def test_detail_includes_reviews_and_photos(self, test_client, business_body):
        await test_client.post("/businesses", json=business_body)
        await test_client.post("/businesses", json={**business_body, "name": "Other"})
        await test_client.post(
            "/reviews",
            json={"userid": 7, "businessid": 1, "dollars": 2, "stars": 4.5, "review": "Good beer"},
        )
        await test_client.post("/reviews", json={"userid": 7, "businessid": 2, "dollars": 1, "stars": 3})
        await test_client.post("/photos", json={"userid": 7, "businessid": 1, "caption": "Patio"})

        response = await test_client.get("/businesses/1")

        assert response.status_code == 200
        business = response.json()
        assert business["name"] == "Block 15"
        assert business["website"] == "http://block15.com"
        assert [r["review"] for r in business["reviews"]] == ["Good beer"]
        assert [p["caption"] for p in business["photos"]] == ["Patio"]

    @pytest.mark.asyncio
    async def test_unknown_business_is_404(self, test_client):
        response = await test_client.get("/businesses/999")

        assert response.status_code == 404
        assert response.json()["error"] == "Requested resource /businesses/999 does not exist"

    @pytest.mark.asyncio
    async def test_non_integer_id_is_404(self, test_client):
        response = await test_client.get("/businesses/abc")

        assert response.status_code == 404
        assert response.json()["error"] == "Requested resource /businesses/abc does not exist"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("businessid", ["0", "-3", "2147483648", "99999999999999999999"])
    async def test_out_of_range_id_is_404(self, test_client, businessid):
        for method in ("GET", "PUT", "DELETE"):
            response = await test_client.request(method, f"/businesses/{businessid}", json={})

            assert response.status_code == 404
            assert response.json()["error"] == f"Requested resource /businesses/{businessid} does not exist"


class TestReplaceBusiness:

    @pytest.mark.asyncio
    async def test_replace_overwrites_all_fields(self, test_client, business_body):
        await test_client.post("/businesses", json=business_body)
        replacement = {**business_body, "name": "Block 15 Brewing"}
        del replacement["website"]

        response = await test_client.put("/businesses/1", json=replacement)

        assert response.status_code == 200
        assert response.json() == {"links": {"business": "/businesses/1"}}
        business = (await test_client.get("/businesses/1")).json()
        assert business["name"] == "Block 15 Brewing"
        assert business["website"] is None
        assert business["id"] == 1

    @pytest.mark.asyncio
    async def test_invalid_replacement_is_400(self, test_client, business_body):
        await test_client.post("/businesses", json=business_body)

        response = await test_client.put("/businesses/1", json={"name": "only a name"})

        assert response.status_code == 400
        assert response.json()["error"] == "Request body is not a valid business object"
        business = (await test_client.get("/businesses/1")).json()
        assert business["name"] == "Block 15"

    @pytest.mark.asyncio
    async def test_replace_unknown_business_is_404(self, test_client, business_body):
        response = await test_client.put("/businesses/5", json=business_body)

        assert response.status_code == 404


class TestDeleteBusiness:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_404(self, test_client, business_body):
        await test_client.post("/businesses", json=business_body)

        response = await test_client.delete("/businesses/1")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get("/businesses/1")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_business_is_404(self, test_client):
        response = await test_client.delete("/businesses/1")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_deleted_business_leaves_list(self, test_client, seed_businesses):
        await seed_businesses(3)

        await test_client.delete("/businesses/2")
        body = (await test_client.get("/businesses")).json()

        assert body["totalCount"] == 2
        assert [b["id"] for b in body["businesses"]] == [1, 3]
