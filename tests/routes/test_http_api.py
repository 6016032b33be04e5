import pytest
from fastapi.testclient import TestClient

from educonnect.auth import jwt_handler
from educonnect.database import get_db
from educonnect.main import app


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _auth(email: str) -> dict:
    return {'Authorization': f'Bearer {jwt_handler.create_access_token(email)}'}


def test_root_returns_greeting(client) -> None:
    assert client.get('/').json() == {'status': 'Hello from EduConnect Server.'}


def test_protected_route_without_header_is_unauthorized(client) -> None:
    response = client.get('/user')

    assert response.status_code == 401


def test_protected_route_with_garbage_token_is_unauthorized(client) -> None:
    response = client.get('/user', headers={'Authorization': 'Bearer not-a-token'})

    assert response.status_code == 401


def test_admin_flag_for_other_email_is_forbidden(client, make_user) -> None:
    make_user('student@example.com', role='admin')

    response = client.get('/users/admin/student@example.com', headers=_auth('intruder@example.com'))

    assert response.status_code == 403


def test_admin_flag_for_self(client, make_user) -> None:
    make_user('root@example.com', role='admin')

    response = client.get('/users/admin/root@example.com', headers=_auth('root@example.com'))

    assert response.json() == {'admin': True}


def test_list_users_requires_admin_role(client, make_user) -> None:
    make_user('student@example.com')

    response = client.get('/users', headers=_auth('student@example.com'))

    assert response.status_code == 403


def test_promote_unknown_user_reports_zero_modification(client, make_user) -> None:
    make_user('root@example.com', role='admin')

    response = client.patch('/users/admin/999', headers=_auth('root@example.com'))

    assert response.status_code == 200
    assert response.json() == {'acknowledged': True, 'matchedCount': 0, 'modifiedCount': 0}


def test_register_search_and_delete_class_flow(client) -> None:
    first = client.post('/users/bob@example.com', json={'name': 'Bob'}).json()
    second = client.post('/users/bob@example.com', json={'name': 'Robert'}).json()
    assert first['id'] == second['id']
    assert second['name'] == 'Bob'

    assert [u['email'] for u in client.get('/users/search', params={'query': 'BOB'}).json()] == ['bob@example.com']

    created = client.post(
        '/class',
        json={
            'title': 'Guitar',
            'price': 12.5,
            'publisher': {'email': 'bob@example.com', 'name': 'Bob'},
            'status': 'approved',
        },
        headers=_auth('bob@example.com'),
    ).json()
    class_id = created['insertedId']

    assert client.get('/allClasses').json()[0]['status'] == 'Pending'

    deleted = client.delete(f'/class/{class_id}', headers=_auth('bob@example.com'))
    assert deleted.json() == {'message': 'Class deleted successfully', 'deletedCount': 1}
    assert client.delete(f'/class/{class_id}', headers=_auth('bob@example.com')).status_code == 404


def test_payment_intent_returns_client_secret(client, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr('educonnect.services.payments.create_payment_intent', lambda amount, metadata=None: 'secret')
    class_id = client.post(
        '/class',
        json={'title': 'Guitar', 'price': 12.5, 'publisher': {'email': 't@example.com'}},
        headers=_auth('t@example.com'),
    ).json()['insertedId']

    response = client.post(f'/create-payment-intent/{class_id}', json={'price': 12.5})

    assert response.json() == {'clientSecret': 'secret'}
    assert client.get('/allClasses').json()[0]['enroll'] == 1


@pytest.mark.parametrize('payload', [{'title': None}, {'price': None}])
def test_update_class_with_null_field_is_validation_error(client, payload: dict) -> None:
    headers = _auth('t@example.com')
    class_id = client.post(
        '/class',
        json={'title': 'Guitar', 'price': 12.5, 'publisher': {'email': 't@example.com'}},
        headers=headers,
    ).json()['insertedId']

    response = client.put(f'/class/{class_id}', json=payload, headers=headers)

    assert response.status_code == 422
    assert client.get(f'/class/{class_id}', headers=headers).json()['title'] == 'Guitar'


def test_unhandled_error_is_logged_with_request_line(client, monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    def exploding_generate_text(prompt: str) -> str:
        raise RuntimeError('boom')

    monkeypatch.setattr('educonnect.services.gemini.generate_text', exploding_generate_text)
    failing_client = TestClient(app, raise_server_exceptions=False)

    with caplog.at_level('ERROR', logger='educonnect.main'):
        response = failing_client.post('/geminiBot', json={'prompt': 'hi'})

    assert response.status_code == 500
    assert any('POST /geminiBot failed' in record.getMessage() for record in caplog.records)
