"""Fake HTTP plumbing shared by the fetcher tests."""

from urllib.parse import unquote

from leaderboard.config import CohortSheet, SheetsConfig


class FakeResponse:
    """Just enough of requests.Response for the client."""

    def __init__(self, status_code=200, payload=None, body_is_json=True):
        self.status_code = status_code
        self._payload = payload
        self._body_is_json = body_is_json

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if not self._body_is_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHTTP:
    """
    Stand-in for requests.get. Answers by range; unknown ranges get a 400.
    A value may be a FakeResponse or an exception instance to raise.
    """

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.calls = []

    def __call__(self, url, params=None, headers=None, timeout=None):
        cell_range = unquote(url.rsplit("/values/", 1)[1])
        self.calls.append({"range": cell_range, "url": url, "params": params, "timeout": timeout})
        answer = self.answers.get(cell_range)
        if answer is None:
            return FakeResponse(400, {"error": {"code": 400, "message": f"Unable to parse range: {cell_range}"}})
        if isinstance(answer, Exception):
            raise answer
        return answer

    @property
    def ranges(self):
        return [c["range"] for c in self.calls]


def make_config(api_key="key-123", plus_one_id="sheet-one", plus_two_id="sheet-two",
                plus_one_range=None, plus_one_layout="weekly"):
    return SheetsConfig(
        api_key=api_key,
        cohorts={
            "plus-one": CohortSheet(plus_one_id, "Plus One", plus_one_range, plus_one_layout, False),
            "plus-two": CohortSheet(plus_two_id, "Plus Two", None, "weekly", True),
        },
    )


def values(rows):
    return FakeResponse(200, {"range": "ignored", "majorDimension": "ROWS", "values": rows})

