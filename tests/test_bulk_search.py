import asyncio
import time

import pytest

from consulta_processos.errors import InvalidRequest, UnsupportedTribunal, UpstreamError
from consulta_processos.models import BulkOutcome, BulkStatus
from consulta_processos.services.bulk_search import BulkSearchService, classify, split_batches
from consulta_processos.services.datajud_client import LookupFailed, LookupNotFound, LookupOk

from conftest import hits, make_record, make_response, requested_digits


class FakeClient:
    """Records batch concurrency.

    Numbers starting with 'nf' are not found, 'err' fail, 'boom' raise and
    'cancel' are cancelled mid-flight.
    """

    def __init__(self, delay=0.01):
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = []

    async def lookup(self, tribunal, number):
        self.calls.append(number)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if number.startswith("nf"):
            return LookupNotFound("Processo não encontrado")
        if number.startswith("err"):
            return LookupFailed(UpstreamError(500, "boom"))
        if number.startswith("boom"):
            raise RuntimeError("unexpected failure")
        if number.startswith("cancel"):
            raise asyncio.CancelledError()
        return LookupOk(make_record(number))


def run(service, tribunal, numbers, **kwargs):
    return asyncio.run(service.fetch_bulk(tribunal, numbers, **kwargs))


def test_split_batches():
    numbers = [str(i) for i in range(25)]
    assert [len(b) for b in split_batches(numbers, 10)] == [10, 10, 5]
    assert split_batches(["a"], 10) == [["a"]]


def test_one_outcome_per_input():
    numbers = [f"ok-{i}" for i in range(7)] + ["nf-1", "err-1", "boom-1"] + [f"ok-{i}" for i in range(7, 12)]
    service = BulkSearchService(FakeClient(), batch_size=4, inter_batch_delay=0)

    outcomes = run(service, "tjsp", numbers)

    assert len(outcomes) == len(numbers)
    assert sorted(o.processNumber for o in outcomes) == sorted(numbers)


def test_outcome_payload_matches_status():
    numbers = ["ok-1", "nf-1", "err-1", "boom-1"]
    service = BulkSearchService(FakeClient(), inter_batch_delay=0)

    outcomes = {o.processNumber: o for o in run(service, "tjsp", numbers)}

    assert outcomes["ok-1"].status == BulkStatus.SUCCESS
    assert outcomes["nf-1"].status == BulkStatus.NOT_FOUND
    assert outcomes["err-1"].status == BulkStatus.ERROR
    assert outcomes["boom-1"].status == BulkStatus.ERROR
    assert outcomes["boom-1"].errorMessage == "unexpected failure"
    assert outcomes["err-1"].errorMessage == "Erro na API DataJud: 500 - boom"
    for outcome in outcomes.values():
        if outcome.status == BulkStatus.SUCCESS:
            assert outcome.record is not None and outcome.errorMessage is None
        else:
            assert outcome.record is None and outcome.errorMessage


def test_batches_are_sequential_and_paced():
    client = FakeClient(delay=0.01)
    service = BulkSearchService(client, batch_size=10, inter_batch_delay=0.1)
    numbers = [f"ok-{i}" for i in range(25)]

    start = time.monotonic()
    outcomes = run(service, "tjsp", numbers)
    elapsed = time.monotonic() - start

    assert len(outcomes) == 25
    assert client.max_in_flight == 10
    # Two pauses between three batches
    assert elapsed >= 2 * 0.1


def test_no_pause_after_single_batch():
    service = BulkSearchService(FakeClient(delay=0), batch_size=10, inter_batch_delay=5)

    start = time.monotonic()
    run(service, "tjsp", ["ok-1", "ok-2"])
    assert time.monotonic() - start < 1


def test_outcomes_follow_batch_order():
    numbers = [f"ok-{i}" for i in range(12)]
    service = BulkSearchService(FakeClient(), batch_size=5, inter_batch_delay=0)

    outcomes = run(service, "tjsp", numbers)
    assert [o.processNumber for o in outcomes[:5]] == numbers[:5]
    assert [o.processNumber for o in outcomes[10:]] == numbers[10:]


def test_empty_list_is_invalid():
    client = FakeClient()
    with pytest.raises(InvalidRequest):
        run(BulkSearchService(client), "tjsp", [])
    assert client.calls == []


def test_over_limit_is_rejected_before_any_lookup():
    client = FakeClient()
    service = BulkSearchService(client, max_items=1000, inter_batch_delay=0)

    with pytest.raises(InvalidRequest):
        run(service, "tjsp", [f"ok-{i}" for i in range(1001)])
    assert client.calls == []


def test_unsupported_tribunal_fails_whole_call():
    client = FakeClient()
    with pytest.raises(UnsupportedTribunal):
        run(BulkSearchService(client, inter_batch_delay=0), "tjxx", ["ok-1"])
    assert client.calls == []


def test_success_callback_receives_only_successes():
    seen = []
    service = BulkSearchService(FakeClient(), inter_batch_delay=0)

    run(service, "tjsp", ["ok-1", "nf-1", "ok-2"], on_success=lambda o: seen.append(o.processNumber))
    assert sorted(seen) == ["ok-1", "ok-2"]


def test_failing_callback_does_not_change_outcomes():
    def callback(outcome):
        raise IOError("disk full")

    service = BulkSearchService(FakeClient(), inter_batch_delay=0)
    outcomes = run(service, "tjsp", ["ok-1"], on_success=callback)
    assert outcomes[0].status == BulkStatus.SUCCESS


def test_classify_cancelled_item_is_error():
    outcome = classify("123", asyncio.CancelledError())
    assert outcome.status == BulkStatus.ERROR
    assert outcome.errorMessage == "Consulta cancelada"


def test_cancelled_lookup_inside_batch_still_has_outcome():
    numbers = ["ok-1", "cancel-1", "ok-2", "nf-1"]
    service = BulkSearchService(FakeClient(), inter_batch_delay=0)

    outcomes = run(service, "tjsp", numbers)

    assert len(outcomes) == len(numbers)
    by_number = {o.processNumber: o for o in outcomes}
    assert by_number["cancel-1"].status == BulkStatus.ERROR
    assert by_number["cancel-1"].errorMessage == "Consulta cancelada"
    assert by_number["ok-1"].status == by_number["ok-2"].status == BulkStatus.SUCCESS
    assert by_number["nf-1"].status == BulkStatus.NOT_FOUND


def test_outcome_model_rejects_inconsistent_payload():
    with pytest.raises(ValueError):
        BulkOutcome(processNumber="1", status=BulkStatus.SUCCESS, errorMessage="x")
    with pytest.raises(ValueError):
        BulkOutcome(processNumber="1", status=BulkStatus.NOT_FOUND)


def test_found_and_missing_against_stubbed_upstream(live_client_factory, raw_source):
    found = dict(raw_source, numeroProcesso="00000000000000000000")

    def responder(url, body):
        if requested_digits(body) == "00000000000000000000":
            return make_response(payload=hits(found))
        return make_response(payload=hits())

    client, session = live_client_factory(responder)
    service = BulkSearchService(client, inter_batch_delay=0)

    outcomes = run(service, "tjsp", ["0000000-00.0000.0.00.0000", "9999999-99.9999.9.99.9999"])

    assert [(o.processNumber, o.status) for o in outcomes] == [
        ("0000000-00.0000.0.00.0000", BulkStatus.SUCCESS),
        ("9999999-99.9999.9.99.9999", BulkStatus.NOT_FOUND),
    ]
    assert outcomes[0].record.tribunal == "TJSP"
    assert outcomes[1].errorMessage == "Processo não encontrado"
    assert session.post.call_count == 2
