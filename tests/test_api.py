"""
Tests for the REST API using FastAPI's TestClient.
"""
from unittest.mock import Mock, patch

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from api import dependencies
from api.app import create_app
from api.errors import to_http_exception
from chat.llm_clients.base import BaseLLMClient, LLMConnectionError
from chat.rag_service import DEFAULT_NO_CONTEXT_MESSAGE
from config.settings import Settings
from core.engine import RagEngine
from core.registry import UnsupportedStrategyKind
from ingestion.loaders.base_loader import SourceNotFound, SourceUnreadable
from ingestion.parsers.base_parser import ParseError
from retrieval.routers import NoRetrieversConfigured

DOCUMENT = (
    "Photosynthesis is the process used by plants to convert light energy into "
    "chemical energy. It takes place in the chloroplasts of plant cells."
)


@pytest.fixture
def llm():
    client = Mock(spec=BaseLLMClient)
    client.generate.return_value = "Plants convert light into chemical energy."
    return client


@pytest.fixture
def engine(llm):
    settings = Settings(
        LLM_PROVIDER="none",
        EMBEDDING_DIMENSION=16,
        RETRIEVAL_MIN_SCORE=0.0,
        SPLITTER_MAX_SEGMENT_SIZE=80,
        SPLITTER_MAX_OVERLAP_SIZE=10,
    )
    return RagEngine.from_settings(settings, llm_client=llm)


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine)) as test_client:
        yield test_client


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "rag-pipeline"}

    def test_engine_cleared_on_shutdown(self, engine):
        with TestClient(create_app(engine)):
            assert dependencies.get_engine() is engine

        with pytest.raises(RuntimeError, match="not initialized"):
            dependencies.get_engine()


class TestDocumentRoutes:

    def test_ingest_text(self, client, engine):
        response = client.post("/api/documents/ingest", json={"text": DOCUMENT, "metadata": {"title": "Bio"}})

        assert response.status_code == 200
        body = response.json()
        assert body["documents_loaded"] == 1
        assert body["segments_stored"] == len(body["segment_ids"]) > 0
        assert body["splitter"] == "RECURSIVE"
        assert engine.container.vector_store.count() == body["segments_stored"]

    def test_ingest_short_text_filtered(self, client):
        response = client.post("/api/documents/ingest", json={"text": "x" * 40})

        assert response.status_code == 200
        assert response.json()["documents_discarded"] == 1
        assert response.json()["segments_stored"] == 0

    def test_ingest_with_options(self, client):
        payload = {
            "text": "Line1\n\n\n\nLine2   with   spaces",
            "options": {"document_transformers": ["CLEANING"], "segment_transformers": []},
        }

        response = client.post("/api/documents/ingest", json=payload)

        assert response.json()["segments_stored"] == 1

    def test_ingest_unknown_splitter(self, client):
        response = client.post(
            "/api/documents/ingest",
            json={"text": DOCUMENT, "options": {"splitter": "SEMANTIC"}}
        )

        assert response.status_code == 400
        assert "Unsupported DocumentSplitter kind: SEMANTIC" in response.json()["detail"]

    def test_ingest_empty_text_rejected(self, client):
        assert client.post("/api/documents/ingest", json={"text": ""}).status_code == 422

    def test_ingest_source_file(self, client, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Notes\n\n" + DOCUMENT, encoding="utf-8")

        response = client.post("/api/documents/ingest-source", json={"source": str(path)})

        assert response.status_code == 200
        assert response.json()["documents_loaded"] == 1

    def test_ingest_source_missing(self, client, tmp_path):
        response = client.post(
            "/api/documents/ingest-source",
            json={"source": str(tmp_path / "missing.txt")}
        )

        assert response.status_code == 404

    def test_ingest_source_unknown_loader(self, client):
        response = client.post("/api/documents/ingest-source", json={"source": "x", "loader": "FTP"})

        assert response.status_code == 400


class TestRagRoutes:

    def test_query_without_documents(self, client, llm):
        response = client.post("/api/rag/query", json={"question": "What is photosynthesis?"})

        assert response.status_code == 200
        assert response.json() == {"answer": DEFAULT_NO_CONTEXT_MESSAGE}
        llm.generate.assert_not_called()

    def test_query_with_sources(self, client):
        client.post("/api/documents/ingest", json={"text": DOCUMENT})

        response = client.post("/api/rag/query-with-sources", json={"question": "What is photosynthesis?"})

        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "Plants convert light into chemical energy."
        assert 0 < len(body["sources"]) <= 5

    def test_llm_failure_is_503(self, client, llm):
        client.post("/api/documents/ingest", json={"text": DOCUMENT})
        llm.generate.side_effect = LLMConnectionError("Failed to connect to Ollama")

        response = client.post("/api/rag/query", json={"question": "What is photosynthesis?"})

        assert response.status_code == 503
        assert "Failed to connect" in response.json()["detail"]

    def test_history(self, client):
        client.post("/api/rag/query", json={"question": "first?"})

        history = client.get("/api/rag/history").json()
        assert [m["role"] for m in history] == ["user", "assistant"]
        assert history[0]["content"] == "first?"

        assert client.delete("/api/rag/history").status_code == 204
        assert client.get("/api/rag/history").json() == []

    def test_blank_question_rejected(self, client):
        assert client.post("/api/rag/query", json={"question": ""}).status_code == 422


class TestStrategyRoutes:

    def test_categories(self, client):
        categories = client.get("/api/strategies").json()

        assert "SPLITTER" in categories
        assert len(categories) == 9

    def test_list_category(self, client):
        response = client.get("/api/strategies/loader")

        assert response.status_code == 200
        assert set(response.json()) == {"FILE_SYSTEM", "URL", "RESOURCE"}

    def test_model_backed_strategies_listed(self, client):
        assert "SUMMARIZER" in client.get("/api/strategies/DOCUMENT_TRANSFORMER").json()

    def test_unknown_category(self, client):
        assert client.get("/api/strategies/EMBEDDER").status_code == 400


class TestErrorMapping:

    @pytest.mark.parametrize("exc,status_code", [
        (UnsupportedStrategyKind("DocumentSplitter", "X"), 400),
        (SourceNotFound("nope"), 404),
        (SourceUnreadable("denied"), 422),
        (ParseError("bad pdf"), 422),
        (NoRetrieversConfigured("none"), 503),
        (LLMConnectionError("down"), 503),
        (ValueError("bad value"), 400),
        (RuntimeError("boom"), 500),
    ])
    def test_status_codes(self, exc, status_code):
        http_exc = to_http_exception(exc)

        assert isinstance(http_exc, HTTPException)
        assert http_exc.status_code == status_code

    def test_unexpected_error_route(self, client, engine):
        with patch.object(engine, "query", side_effect=RuntimeError("boom")):
            response = client.post("/api/rag/query", json={"question": "q"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal error: boom"
