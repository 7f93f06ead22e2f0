import logging

import httpx
import pytest

from osuv1.core.errors import (
    ChunkingResponse,
    InvalidMultiplayerMatch,
    ParsingError,
    RequestError,
    ResponseError,
    ServiceUnavailable,
)
from osuv1.core.osu_api_client import USER_AGENT
from osuv1.schemas.beatmap import Beatmap


@pytest.mark.asyncio
async def test_service_unavailable(make_osu):
    osu = make_osu(lambda request: httpx.Response(status_code=503, text="down"))

    with pytest.raises(ServiceUnavailable) as exc_info:
        await osu.beatmaps()

    assert exc_info.value.body == "down"


@pytest.mark.asyncio
async def test_upstream_error_object(make_osu):
    osu = make_osu(lambda request: httpx.Response(status_code=500, content=b'{"error":"bad"}'))

    with pytest.raises(ResponseError) as exc_info:
        await osu.user(2)

    error = exc_info.value
    assert error.status == 500
    assert error.body == '{"error":"bad"}'
    assert error.error.error == "bad"


@pytest.mark.asyncio
async def test_unparseable_error_body(make_osu):
    osu = make_osu(lambda request: httpx.Response(status_code=500, content=b'"garbled"'))

    with pytest.raises(ParsingError) as exc_info:
        await osu.user(2)

    assert exc_info.value.body == '"garbled"'


@pytest.mark.asyncio
async def test_too_many_requests_logs_a_warning(make_osu, caplog):
    osu = make_osu(lambda request: httpx.Response(status_code=429, json={"error": "slow down"}))

    with caplog.at_level(logging.WARNING, logger="osuv1.core.osu_api_client"):
        with pytest.raises(ResponseError) as exc_info:
            await osu.recent_scores("peppy")

    assert exc_info.value.status == 429
    assert any("429" in record.getMessage() for record in caplog.records)


@pytest.mark.asyncio
async def test_request_url_and_headers(make_osu, sent_requests):
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=[]))

    await osu.user("mr ekko").event_days(3)

    request = sent_requests[0]
    assert request.method == "GET"
    assert request.url.path == "/api/get_user"
    assert str(request.url).endswith("&k=test-key")
    assert "type=string&u=mr+ekko&event_days=3" in str(request.url)
    assert request.headers["User-Agent"] == USER_AGENT
    assert USER_AGENT.endswith(" rosu")


@pytest.mark.asyncio
async def test_list_endpoint(make_osu, beatmap_payload):
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=[beatmap_payload, beatmap_payload]))

    beatmaps = await osu.beatmaps().mapset_id(93398)

    assert len(beatmaps) == 2
    assert all(isinstance(beatmap, Beatmap) for beatmap in beatmaps)


@pytest.mark.asyncio
async def test_single_result_endpoints(make_osu, score_payload, user_payload):
    responses = iter([[score_payload, {**score_payload, "score": "1"}], [user_payload], []])
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=next(responses)))

    score = await osu.score(252002).send()
    user = await osu.user(2)
    missing = await osu.beatmap().map_id(1)

    assert score.score == 10433546
    assert user.username == "peppy"
    assert missing is None


@pytest.mark.asyncio
async def test_single_result_requires_an_array(make_osu, user_payload):
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=user_payload))

    with pytest.raises(ParsingError) as exc_info:
        await osu.user(2)

    assert '"username"' in exc_info.value.body


@pytest.mark.asyncio
async def test_parsing_error_keeps_body(make_osu):
    osu = make_osu(lambda request: httpx.Response(status_code=200, content=b'[{"score": "many"}]'))

    with pytest.raises(ParsingError) as exc_info:
        await osu.scores(1)

    assert exc_info.value.body == '[{"score": "many"}]'


@pytest.mark.asyncio
async def test_match(make_osu, match_payload):
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=match_payload))

    osu_match = await osu.osu_match(59599346)

    assert osu_match.name == "OWC: (United States) vs (South Korea)"
    assert len(osu_match.games[0].scores) == 1


@pytest.mark.asyncio
async def test_invalid_match(make_osu):
    osu = make_osu(lambda request: httpx.Response(status_code=200, content=b'{"match":0,"games":[]}'))

    with pytest.raises(InvalidMultiplayerMatch) as exc_info:
        await osu.osu_match(1)

    assert exc_info.value.body == '{"match":0,"games":[]}'


@pytest.mark.asyncio
async def test_transport_failure(make_osu):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    osu = make_osu(handler)

    with pytest.raises(RequestError) as exc_info:
        await osu.user(2)

    assert isinstance(exc_info.value.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_body_read_failure(make_osu):
    class BrokenStream(httpx.AsyncByteStream):
        async def __aiter__(self):
            raise httpx.ReadError("connection reset")
            yield b""

    osu = make_osu(lambda request: httpx.Response(status_code=200, stream=BrokenStream()))

    with pytest.raises(ChunkingResponse):
        await osu.user(2)


@pytest.mark.asyncio
async def test_api_key_is_escaped(make_osu, sent_requests):
    osu = make_osu(lambda request: httpx.Response(status_code=200, json=[]))
    osu.api_key = "a&b c"

    await osu.user(2)

    request = sent_requests[0]
    assert str(request.url).endswith("&k=a%26b+c")
    assert request.url.params["k"] == "a&b c"
    assert "u" in request.url.params
