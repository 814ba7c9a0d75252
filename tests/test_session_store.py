"""Tests for the client session store."""

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from authflow.client import (
    AuthApiClient,
    Initialize,
    Login,
    Logout,
    MemoryStorage,
    Register,
    SessionState,
    SessionStatus,
    SessionStore,
    SessionUser,
    SetConfirmPassword,
    SetEmail,
    SetPassword,
)
from authflow.client.store import TOKEN_KEY, USER_KEY

MockApi = Callable[[Callable[[httpx.Request], object]], AuthApiClient]


def success(user_id: int = 1, email: str = "test@example.com") -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "success": True,
            "token": "mock-jwt-token",
            "user": {"id": user_id, "email": email},
            "message": "Login successful",
        },
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


def make_store(
    mock_api: MockApi,
    storage: MemoryStorage,
    handler: Callable[[httpx.Request], object],
) -> SessionStore:
    return SessionStore(mock_api(handler), storage)


class TestInitialState:
    """Tests for a freshly created store."""

    def test_defaults(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: success())

        state = store.get_state()

        assert state == SessionState()
        assert state.status is SessionStatus.ANONYMOUS
        assert state.user is None
        assert state.token is None


class TestFieldUpdates:
    """Tests for the credential setters."""

    def test_setters_change_only_their_field(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(mock_api, storage, lambda request: success())

        store.set_email("test@example.com")
        store.set_password("password123")
        store.set_confirm_password("password123")

        state = store.get_state()
        assert state.email == "test@example.com"
        assert state.password == "password123"
        assert state.confirm_password == "password123"
        assert state.error is None
        assert not state.is_logged_in


class TestLogin:
    """Tests for SessionStore.login."""

    async def test_login_success(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return success()

        store = make_store(mock_api, storage, handler)
        store.set_email("test@example.com")
        store.set_password("password123")

        await store.login()

        state = store.get_state()
        assert state.is_logged_in
        assert state.user == SessionUser(id=1, email="test@example.com")
        assert state.token == "mock-jwt-token"
        assert not state.is_loading
        assert state.error is None
        assert (state.email, state.password, state.confirm_password) == ("", "", "")
        assert state.status is SessionStatus.AUTHENTICATED

        assert storage.get_item(TOKEN_KEY) == "mock-jwt-token"
        assert json.loads(storage.get_item(USER_KEY) or "") == {
            "id": 1,
            "email": "test@example.com",
        }

        assert len(requests) == 1
        assert requests[0].url.path == "/api/auth/login"
        assert json.loads(requests[0].content) == {
            "email": "test@example.com",
            "password": "password123",
        }

    async def test_login_failure_uses_server_message(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(
            mock_api,
            storage,
            lambda request: httpx.Response(401, json={"message": "Invalid credentials"}),
        )
        store.set_email("test@example.com")
        store.set_password("wrongpassword")

        await store.login()

        state = store.get_state()
        assert not state.is_logged_in
        assert state.user is None
        assert state.token is None
        assert state.error == "Invalid credentials"
        assert not state.is_loading
        assert state.status is SessionStatus.ANONYMOUS_WITH_ERROR
        assert storage.snapshot() == {}

    async def test_login_failure_without_message(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(mock_api, storage, lambda request: httpx.Response(502, json={}))

        await store.login()

        assert store.get_state().error == "Request failed with status 502"

    async def test_network_error(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Network error", request=request)

        store = make_store(mock_api, storage, handler)
        store.set_email("test@example.com")
        store.set_password("password123")

        await store.login()

        state = store.get_state()
        assert not state.is_logged_in
        assert state.error == "Network error"
        assert not state.is_loading
        # Entered credentials survive a failed attempt
        assert state.email == "test@example.com"

    async def test_closed_client(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        api = mock_api(lambda request: success())
        await api.aclose()
        store = SessionStore(api, storage)

        await store.login()

        state = store.get_state()
        assert not state.is_loading
        assert not state.is_logged_in
        assert state.error
        assert state.status is SessionStatus.ANONYMOUS_WITH_ERROR

    async def test_unexpected_handler_error(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        store = make_store(mock_api, storage, handler)

        await store.login()

        state = store.get_state()
        assert not state.is_loading
        assert state.error == "boom"

    async def test_storage_failure(self, mock_api: MockApi) -> None:
        class BrokenStorage(MemoryStorage):
            def set_item(self, key: str, value: str) -> None:
                raise OSError("read-only file system")

        store = SessionStore(mock_api(lambda request: success()), BrokenStorage())

        await store.login()

        state = store.get_state()
        assert not state.is_loading
        assert not state.is_logged_in
        assert state.token is None
        assert state.error == "Could not save session"

    async def test_non_json_response(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: httpx.Response(502, text="Bad Gateway"))

        await store.login()

        state = store.get_state()
        assert state.error
        assert not state.is_loading
        assert not state.is_logged_in

    async def test_malformed_success_body(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(
            mock_api,
            storage,
            lambda request: httpx.Response(200, json={"success": True, "user": {"id": 1}}),
        )

        await store.login()

        state = store.get_state()
        assert state.error == "Unexpected response from server"
        assert not state.is_logged_in
        assert storage.snapshot() == {}

    async def test_loading_is_observable(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: success())
        seen: list[SessionStatus] = []
        store.subscribe(lambda state: seen.append(state.status))

        await store.login()

        assert seen[0] is SessionStatus.AUTHENTICATING
        assert seen[-1] is SessionStatus.AUTHENTICATED

    async def test_new_attempt_clears_previous_error(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        responses = iter(
            [httpx.Response(401, json={"message": "Invalid credentials"}), success()]
        )
        store = make_store(mock_api, storage, lambda request: next(responses))
        errors: list[str | None] = []

        await store.login()
        store.subscribe(lambda state: errors.append(state.error))
        await store.login()

        assert errors[0] is None
        assert store.get_state().error is None
        assert store.get_state().is_logged_in

    async def test_cancellation_resets_loading(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        started = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            started.set()
            await asyncio.sleep(10)
            return success()

        store = make_store(mock_api, storage, handler)
        task = asyncio.create_task(store.login())
        await started.wait()
        assert store.get_state().is_loading

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        state = store.get_state()
        assert not state.is_loading
        assert not state.is_logged_in
        assert storage.snapshot() == {}


class TestRegister:
    """Tests for SessionStore.register."""

    async def test_register_success(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        bodies: list[dict[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            assert request.url.path == "/api/auth/register"
            return success(user_id=2, email="new@example.com")

        store = make_store(mock_api, storage, handler)
        store.set_email("new@example.com")
        store.set_password("password123!A")
        store.set_confirm_password("password123!A")

        await store.register()

        state = store.get_state()
        assert state.is_logged_in
        assert state.user == SessionUser(id=2, email="new@example.com")
        assert storage.get_item(TOKEN_KEY) == "mock-jwt-token"
        assert bodies == [
            {
                "email": "new@example.com",
                "password": "password123!A",
                "confirmPassword": "password123!A",
            }
        ]

    async def test_register_conflict(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(
            mock_api,
            storage,
            lambda request: httpx.Response(
                409, json={"message": "An account with this email already exists"}
            ),
        )

        await store.register()

        state = store.get_state()
        assert state.error == "An account with this email already exists"
        assert not state.is_logged_in


class TestLogout:
    """Tests for SessionStore.logout."""

    async def test_logout_clears_session_and_storage(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(mock_api, storage, lambda request: success())
        await store.login()

        store.logout()

        state = store.get_state()
        assert not state.is_logged_in
        assert state.user is None
        assert state.token is None
        assert (state.email, state.password, state.confirm_password) == ("", "", "")
        assert storage.get_item(TOKEN_KEY) is None
        assert storage.get_item(USER_KEY) is None

    async def test_logout_then_initialize_stays_logged_out(
        self, mock_api: MockApi, storage: MemoryStorage
    ) -> None:
        store = make_store(mock_api, storage, lambda request: success())
        await store.login()
        store.logout()

        store.initialize()

        assert not store.get_state().is_logged_in


class TestInitialize:
    """Tests for SessionStore.initialize."""

    def test_restores_saved_session(self, mock_api: MockApi) -> None:
        storage = MemoryStorage(
            {
                TOKEN_KEY: "stored-token",
                USER_KEY: json.dumps({"id": 1, "email": "test@example.com"}),
            }
        )
        store = SessionStore(mock_api(lambda request: success()), storage)

        store.initialize()

        state = store.get_state()
        assert state.is_logged_in
        assert state.token == "stored-token"
        assert state.user == SessionUser(id=1, email="test@example.com")

    def test_initialize_is_idempotent(self, mock_api: MockApi) -> None:
        storage = MemoryStorage(
            {
                TOKEN_KEY: "stored-token",
                USER_KEY: json.dumps({"id": 1, "email": "test@example.com"}),
            }
        )
        store = SessionStore(mock_api(lambda request: success()), storage)

        store.initialize()
        first = store.get_state()
        store.initialize()

        assert store.get_state() == first

    @pytest.mark.parametrize(
        "saved",
        [{}, {TOKEN_KEY: "stored-token"}, {USER_KEY: json.dumps({"id": 1, "email": "a@b.co"})}],
    )
    def test_partial_storage_is_ignored(
        self, mock_api: MockApi, saved: dict[str, str]
    ) -> None:
        storage = MemoryStorage(saved)
        store = SessionStore(mock_api(lambda request: success()), storage)

        store.initialize()

        assert store.get_state() == SessionState()
        assert storage.snapshot() == saved

    @pytest.mark.parametrize(
        "user_json",
        ["invalid-json", json.dumps([1, 2]), json.dumps({"id": "1", "email": "a@b.co"})],
    )
    def test_corrupt_user_is_discarded(self, mock_api: MockApi, user_json: str) -> None:
        storage = MemoryStorage({TOKEN_KEY: "stored-token", USER_KEY: user_json})
        store = SessionStore(mock_api(lambda request: success()), storage)

        store.initialize()

        state = store.get_state()
        assert not state.is_logged_in
        assert state.user is None
        assert state.token is None
        assert state.error is None
        assert storage.snapshot() == {}


class TestDispatch:
    """Tests for SessionStore.dispatch and subscriptions."""

    async def test_dispatch_runs_actions(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: success())

        await store.dispatch(SetEmail("test@example.com"))
        await store.dispatch(SetPassword("password123"))
        await store.dispatch(SetConfirmPassword("password123"))
        state = await store.dispatch(Login())

        assert state.is_logged_in

        state = await store.dispatch(Logout())
        assert not state.is_logged_in

        state = await store.dispatch(Initialize())
        assert not state.is_logged_in

        state = await store.dispatch(Register())
        assert state.is_logged_in

    async def test_unknown_action(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: success())

        with pytest.raises(TypeError):
            await store.dispatch("login")  # type: ignore[arg-type]

    def test_unsubscribe(self, mock_api: MockApi, storage: MemoryStorage) -> None:
        store = make_store(mock_api, storage, lambda request: success())
        seen: list[str] = []
        unsubscribe = store.subscribe(lambda state: seen.append(state.email))

        store.set_email("a@b.co")
        unsubscribe()
        store.set_email("c@d.co")
        unsubscribe()

        assert seen == ["a@b.co"]
