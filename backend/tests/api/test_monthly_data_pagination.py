"""Listing & Pagination — newest first, page/limit math, lenient parsing."""

URL = "/api/v1/data"


async def test_page_two_of_twelve_records(client, user_headers, seed_records):
    await seed_records(12)
    res = await client.get(URL, params={"page": 2, "limit": 5}, headers=user_headers)
    assert res.status_code == 200
    body = res.json()
    assert len(body["data"]) == 5
    assert body["pagination"] == {"current": 2, "pages": 3, "total": 12}


async def test_last_page_is_partial(client, user_headers, seed_records):
    await seed_records(12)
    body = (await client.get(
        URL, params={"page": 3, "limit": 5}, headers=user_headers,
    )).json()
    assert len(body["data"]) == 2


async def test_page_past_the_end_is_empty(client, user_headers, seed_records):
    await seed_records(3)
    body = (await client.get(
        URL, params={"page": 9, "limit": 5}, headers=user_headers,
    )).json()
    assert body["data"] == []
    assert body["pagination"] == {"current": 9, "pages": 1, "total": 3}


async def test_records_are_newest_first(client, user_headers, seed_records):
    records = await seed_records(4)
    body = (await client.get(URL, headers=user_headers)).json()
    assert [r["username"] for r in body["data"]] == [
        r.username for r in reversed(records)
    ]


async def test_pages_do_not_overlap(client, user_headers, seed_records):
    await seed_records(12)
    seen = []
    for page in (1, 2, 3):
        body = (await client.get(
            URL, params={"page": page, "limit": 5}, headers=user_headers,
        )).json()
        seen.extend(r["id"] for r in body["data"])
    assert len(seen) == len(set(seen)) == 12


async def test_defaults_are_page_one_limit_ten(client, user_headers, seed_records):
    await seed_records(12)
    body = (await client.get(URL, headers=user_headers)).json()
    assert len(body["data"]) == 10
    assert body["pagination"] == {"current": 1, "pages": 2, "total": 12}


async def test_garbage_page_values_fall_back_to_defaults(client, user_headers, seed_records):
    await seed_records(2)
    res = await client.get(
        URL, params={"page": "abc", "limit": "-4"}, headers=user_headers,
    )
    assert res.status_code == 200
    assert res.json()["pagination"] == {"current": 1, "pages": 1, "total": 2}


async def test_empty_collection(client, user_headers):
    body = (await client.get(URL, headers=user_headers)).json()
    assert body == {"data": [], "pagination": {"current": 1, "pages": 0, "total": 0}}


async def test_listed_records_include_creator(client, user_headers, seed_records):
    await seed_records(1)
    body = (await client.get(URL, headers=user_headers)).json()
    assert body["data"][0]["createdBy"]["username"] == "root"


async def test_filter_by_username(client, user_headers, seed_records):
    await seed_records(5)
    body = (await client.get(
        URL, params={"username": "user03"}, headers=user_headers,
    )).json()
    assert [r["username"] for r in body["data"]] == ["user03"]
    assert body["pagination"]["total"] == 1


async def test_huge_page_is_empty_not_an_error(client, user_headers, seed_records):
    await seed_records(2)
    res = await client.get(
        URL, params={"page": "99999999999999999999"}, headers=user_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 2
    assert body["pagination"]["pages"] == 1
