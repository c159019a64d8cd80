def _save(client, rom_hash: str, state: bytes):
    return client.post(
        f"/api/v1/roms/{rom_hash}/saves",
        content=state,
        headers={"Content-Type": "application/octet-stream"},
    )


class TestSaves:
    def test_create_and_download(self, client):
        r = _save(client, "abc", b"\x00state")
        assert r.status_code == 201
        ts = r.json()["timestamp"]

        r = client.get(f"/api/v1/saves/{ts}/state")
        assert r.status_code == 200
        assert r.content == b"\x00state"

    def test_list_newest_first(self, client):
        t1 = _save(client, "abc", b"1").json()["timestamp"]
        t2 = _save(client, "abc", b"22").json()["timestamp"]
        _save(client, "other", b"x")

        saves = client.get("/api/v1/roms/abc/saves").json()
        assert [s["timestamp"] for s in saves] == [t2, t1]
        assert saves[0]["size"] == 2

    def test_latest(self, client):
        assert client.get("/api/v1/roms/abc/saves/latest").status_code == 404
        _save(client, "abc", b"1")
        t2 = _save(client, "abc", b"2").json()["timestamp"]
        assert client.get("/api/v1/roms/abc/saves/latest").json()["timestamp"] == t2

    def test_unknown_timestamp(self, client):
        assert client.get("/api/v1/saves/1/state").status_code == 404
