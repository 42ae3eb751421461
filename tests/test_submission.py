import pytest

from models import ErrorKind, FormData, Modality, Severity
from utils.api_client import AdmissionsClient, ApiError
from utils.selection import ProgramSelection
from utils.submission import SubmissionController, SubmissionState

from conftest import FakeSession, make_response

S = SubmissionState


class FakeClient:
    def __init__(self, candidate_id=10, fail_create=False, fail_attach=False):
        self.candidate_id = candidate_id
        self.fail_create = fail_create
        self.fail_attach = fail_attach
        self.created = []
        self.attached = []

    def create_candidate(self, candidate):
        if self.fail_create:
            raise ApiError("Error 500", "http://api.test/postulantes", 500)
        self.created.append(candidate)
        return self.candidate_id

    def attach_programs(self, candidate_id, program_ids):
        if self.fail_attach:
            raise ApiError("Error 404", "http://api.test/postulante_carrera/10", 404)
        self.attached.append((candidate_id, list(program_ids)))


def valid_form():
    return FormData(
        full_name="Juan Carlos Perez Mora",
        cedula="1710034065",
        email="juan@example.com",
        phone="0991234567",
    )


def make_controller(catalog, client=None, program_ids=(1,)):
    selection = ProgramSelection(catalog, retain_across_modalities=False)
    selection.set_modality(Modality.PRESENCIAL)
    for pid in program_ids:
        selection.toggle_program(Modality.PRESENCIAL, pid)
    controller = SubmissionController(
        client or FakeClient(),
        selection,
        address="Quito",
        birth_date="2001-05-04",
        academic_period_id=2,
    )
    return controller


def test_successful_submission(catalog):
    client = FakeClient(candidate_id=99)
    controller = make_controller(catalog, client)
    form = valid_form()

    note = controller.submit(form)

    assert note.severity is Severity.SUCCESS
    candidate = client.created[0]
    assert candidate.given_names == "Juan Carlos"
    assert candidate.family_names == "Perez Mora"
    assert candidate.program_ids == [1]
    assert candidate.address == "Quito"
    assert candidate.academic_period_id == 2
    assert client.attached == [(99, [1])]
    assert controller.history == [S.IDLE, S.VALIDATING, S.SUBMITTING, S.SUCCESS, S.IDLE]
    assert controller.last_candidate_id == 99


def test_success_clears_form_and_selection(catalog):
    controller = make_controller(catalog)
    form = valid_form()
    controller.submit(form)
    assert form == FormData()
    assert controller.selection.flatten() == []
    assert controller.selection.modality is None


@pytest.mark.parametrize(
    "field, value, kind, severity",
    [
        ("email", "", ErrorKind.MISSING_FIELDS, Severity.WARN),
        ("cedula", "1710034066", ErrorKind.INVALID_NATIONAL_ID, Severity.ERROR),
        ("phone", "991234567", ErrorKind.INVALID_PHONE, Severity.ERROR),
    ],
)
def test_validation_failures_skip_network(catalog, field, value, kind, severity):
    client = FakeClient()
    controller = make_controller(catalog, client)
    form = valid_form()
    setattr(form, field, value)

    note = controller.submit(form)

    assert note.kind is kind
    assert note.severity is severity
    assert client.created == []
    assert controller.history == [S.IDLE, S.VALIDATING, S.IDLE]
    assert form.full_name == "Juan Carlos Perez Mora"


def test_missing_fields_checked_before_cedula(catalog):
    controller = make_controller(catalog)
    form = valid_form()
    form.cedula = "123"
    form.full_name = ""
    assert controller.submit(form).kind is ErrorKind.MISSING_FIELDS


def test_no_program_selected_is_missing_field(catalog):
    controller = make_controller(catalog, program_ids=())
    assert controller.submit(valid_form()).kind is ErrorKind.MISSING_FIELDS


def test_invalid_cedula_checked_before_phone(catalog):
    controller = make_controller(catalog)
    form = valid_form()
    form.cedula = "2510034065"
    form.phone = "12"
    assert controller.submit(form).kind is ErrorKind.INVALID_NATIONAL_ID


def test_create_failure_keeps_form(catalog):
    client = FakeClient(fail_create=True)
    controller = make_controller(catalog, client)
    form = valid_form()

    note = controller.submit(form)

    assert note.kind is ErrorKind.NETWORK_OR_SERVER
    assert client.attached == []
    assert form == valid_form()
    assert controller.selection.flatten() == [1]
    assert controller.history[-2:] == [S.FAILED, S.IDLE]


def test_attach_failure_is_not_rolled_back(catalog):
    client = FakeClient(candidate_id=5, fail_attach=True)
    controller = make_controller(catalog, client)

    note = controller.submit(valid_form())

    assert note.kind is ErrorKind.NETWORK_OR_SERVER
    assert len(client.created) == 1
    assert controller.last_candidate_id == 5
    assert controller.state is S.IDLE


def test_submit_while_submitting_is_rejected(catalog):
    client = FakeClient()
    controller = make_controller(catalog, client)
    controller.state = S.SUBMITTING

    note = controller.submit(valid_form())

    assert note.severity is Severity.WARN
    assert client.created == []


def test_retry_after_failure_succeeds(catalog):
    client = FakeClient(fail_create=True)
    controller = make_controller(catalog, client)
    form = valid_form()
    controller.submit(form)

    client.fail_create = False
    assert controller.submit(form).ok
    assert len(client.created) == 1


def test_multi_modality_submission_sends_all(catalog):
    client = FakeClient()
    selection = ProgramSelection(catalog, retain_across_modalities=True)
    selection.set_modality(Modality.PRESENCIAL)
    selection.toggle_program(Modality.PRESENCIAL, 2)
    selection.set_modality(Modality.ON_LINE)
    selection.toggle_program(Modality.ON_LINE, 3)
    controller = SubmissionController(client, selection)

    assert controller.submit(valid_form()).ok
    assert client.attached[0][1] == [2, 3]


def test_reset_clears_everything(catalog):
    controller = make_controller(catalog)
    form = valid_form()
    controller.reset(form)
    assert form == FormData()
    assert controller.selection.flatten() == []


def make_http_controller(catalog, *responses):
    session = FakeSession(*responses)
    client = AdmissionsClient("http://api.test", session=session)
    return make_controller(catalog, client), session


def test_end_to_end_over_http(catalog):
    controller, session = make_http_controller(
        catalog, make_response(201, {"id": 7}), make_response(200)
    )

    assert controller.submit(valid_form()).ok

    create, attach = session.calls
    assert create["url"] == "http://api.test/postulantes"
    assert create["json"]["nombres"] == "Juan Carlos"
    assert create["json"]["apellidos"] == "Perez Mora"
    assert create["json"]["cedula"] == "1710034065"
    assert create["json"]["estado"] == "PENDIENTE"
    assert attach["url"] == "http://api.test/postulante_carrera/7"
    assert attach["json"] == {"carreras": [1]}
    assert controller.history == [S.IDLE, S.VALIDATING, S.SUBMITTING, S.SUCCESS, S.IDLE]


def test_non_numeric_created_id_fails_and_returns_to_idle(catalog):
    controller, session = make_http_controller(
        catalog,
        make_response(201, {"id": "a1b2"}),
        make_response(201, {"id": 8}),
        make_response(200),
    )
    form = valid_form()

    note = controller.submit(form)

    assert note.kind is ErrorKind.NETWORK_OR_SERVER
    assert controller.state is S.IDLE
    assert controller.history[-2:] == [S.FAILED, S.IDLE]
    assert len(session.calls) == 1

    assert controller.submit(form).ok
    assert len(session.calls) == 3


def test_http_error_on_attach_fails(catalog):
    controller, session = make_http_controller(
        catalog, make_response(201, {"id": 7}), make_response(500, {"error": "x"})
    )
    form = valid_form()

    assert controller.submit(form).kind is ErrorKind.NETWORK_OR_SERVER
    assert controller.last_candidate_id == 7
    assert form == valid_form()


def test_unexpected_error_still_returns_to_idle(catalog):
    class BrokenClient(FakeClient):
        def create_candidate(self, candidate):
            raise KeyError("id")

    controller = make_controller(catalog, BrokenClient())
    with pytest.raises(KeyError):
        controller.submit(valid_form())
    assert controller.state is S.IDLE
    assert controller.history[-2:] == [S.FAILED, S.IDLE]
