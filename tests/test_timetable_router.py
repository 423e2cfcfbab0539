import json

from io import BytesIO

from openpyxl import load_workbook

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200


def test_export_returns_workbook(client, simple_payload):
    r = client.post("/timetable/export", content=json.dumps(simple_payload))

    assert r.status_code == 200
    assert r.headers["content-type"].startswith(XLSX)
    assert 'filename="course_schedule.xlsx"' in r.headers["content-disposition"]
    assert r.headers["x-max-week"] == "2"
    wb = load_workbook(BytesIO(r.content))
    assert wb.sheetnames == ["第1周", "第2周"]


def test_export_upload(client, simple_payload):
    files = {"file": ("schedule.json", json.dumps(simple_payload).encode("utf-8"), "application/json")}
    r = client.post("/timetable/export/upload", files=files)

    assert r.status_code == 200
    assert load_workbook(BytesIO(r.content)).sheetnames == ["第1周", "第2周"]


def test_export_empty_input(client):
    r = client.post("/timetable/export", content="   ")

    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["state"] == "failure"
    assert detail["message"] == "生成失败：JSON内容不能为空！"


def test_export_bad_json(client):
    r = client.post("/timetable/export", content='{"data": [')

    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "生成失败：JSON格式错误，请检查是否复制完整..."


def test_export_missing_data(client):
    r = client.post("/timetable/export", content='{"items": []}')

    assert r.status_code == 400
    assert "'data'" in r.json()["detail"]["message"]


def test_export_non_utf8_body(client):
    r = client.post("/timetable/export", content=b"\xff\xfe\x00")
    assert r.status_code == 400


def test_preview(client, make_meeting):
    payload = {"data": [{"monday": [
        make_meeting("1", teacher="Alice"),
        make_meeting("1", teacher="Bob"),
        {"weeks": "1", "className": "Art"},
    ]}]}
    r = client.post("/timetable/preview", content=json.dumps(payload))

    assert r.status_code == 200
    body = r.json()
    assert body["status"]["state"] == "success"
    assert body["status"]["sheet_count"] == 1
    assert body["max_week"] == 1
    assert body["sheets"][0]["rows"][1][1] == "Math\nR101\nAlice、Bob"


def test_export_deeply_nested_json(client):
    r = client.post("/timetable/export", content="[" * 100000 + "]" * 100000)

    assert r.status_code == 400
    assert r.json()["detail"]["message"] == "生成失败：JSON格式错误，请检查是否复制完整..."


def test_export_nan_weeks(client):
    text = '{"data": [{"monday": [{"weeks": NaN, "className": "Math", ' \
           '"classroomName": "R101", "teacherName": "Alice"}]}]}'
    r = client.post("/timetable/export", content=text)

    assert r.status_code == 400
    assert r.json()["detail"]["state"] == "failure"


def test_generation_runs_off_the_event_loop(client, simple_payload, monkeypatch):
    import app.routers.timetable as timetable
    from fastapi.concurrency import run_in_threadpool

    called = []

    async def spy(func, *args, **kwargs):
        called.append(func.__name__)
        return await run_in_threadpool(func, *args, **kwargs)

    monkeypatch.setattr(timetable, "run_in_threadpool", spy)

    assert client.post("/timetable/export", content=json.dumps(simple_payload)).status_code == 200
    assert client.post("/timetable/preview", content=json.dumps(simple_payload)).status_code == 200
    assert called == ["generate_sheets", "generate_sheets"]
