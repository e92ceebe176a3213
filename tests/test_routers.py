"""
Tests para los routers de consultas.
"""
from unittest.mock import Mock

import pytest

from chat.llm_clients.base import BaseLLMClient, LLMResponseError
from core.registry import StrategyRegistry, UnsupportedStrategyKind
from domain.models import Query
from retrieval.retrievers.base import BaseRetriever, RetrieverKind
from retrieval.routers import (
    DefaultQueryRouter,
    LanguageModelQueryRouter,
    NoRetrieversConfigured,
    QueryRouterKind,
    RoundRobinQueryRouter,
    RuleBasedQueryRouter,
    build_router_registry,
    parse_rules,
    select_router,
)


class StubRetriever(BaseRetriever):

    def __init__(self, kind, enabled=True):
        self.kind = kind
        super().__init__(enabled=enabled)

    def _search(self, request):
        return []


def registry_of(*retrievers):
    return StrategyRegistry(RetrieverKind, retrievers, category="ContentRetriever")


@pytest.fixture
def store_retriever():
    return StubRetriever(RetrieverKind.EMBEDDING_STORE)


@pytest.fixture
def hybrid_retriever():
    return StubRetriever(RetrieverKind.HYBRID)


@pytest.fixture
def retrievers(store_retriever, hybrid_retriever):
    return registry_of(store_retriever, hybrid_retriever)


@pytest.fixture
def llm():
    return Mock(spec=BaseLLMClient)


class TestDefaultQueryRouter:

    def test_routes_to_all_enabled(self, retrievers, store_retriever, hybrid_retriever):
        router = DefaultQueryRouter(retrievers)

        assert router.route(Query(text="q")) == [store_retriever, hybrid_retriever]

    def test_skips_disabled(self, store_retriever):
        retrievers = registry_of(store_retriever, StubRetriever(RetrieverKind.HYBRID, enabled=False))

        assert DefaultQueryRouter(retrievers).route(Query(text="q")) == [store_retriever]

    def test_no_enabled_retrievers(self):
        """Sin retrievers habilitados se señala el error, no una lista vacía"""
        retrievers = registry_of(StubRetriever(RetrieverKind.EMBEDDING_STORE, enabled=False))

        with pytest.raises(NoRetrieversConfigured):
            DefaultQueryRouter(retrievers).route(Query(text="q"))

    def test_empty_registry(self):
        with pytest.raises(NoRetrieversConfigured):
            DefaultQueryRouter(registry_of()).route(Query(text="q"))


class TestLanguageModelQueryRouter:

    def test_selects_numbered_options(self, retrievers, llm, hybrid_retriever):
        llm.generate.return_value = "2"
        router = LanguageModelQueryRouter(retrievers, llm)

        assert router.route(Query(text="Who is Ada Lovelace?")) == [hybrid_retriever]
        prompt = llm.generate.call_args[0][0][0].content
        assert "1: Semantic search over the ingested knowledge base" in prompt
        assert "User query: Who is Ada Lovelace?" in prompt

    def test_multiple_and_duplicate_numbers(self, retrievers, llm, store_retriever, hybrid_retriever):
        llm.generate.return_value = "2, 1, 2"

        assert LanguageModelQueryRouter(retrievers, llm).route(Query(text="q")) == [hybrid_retriever, store_retriever]

    @pytest.mark.parametrize("answer", ["none of them", "7", "0"])
    def test_unusable_answer_routes_to_all(self, retrievers, llm, answer):
        llm.generate.return_value = answer

        assert len(LanguageModelQueryRouter(retrievers, llm).route(Query(text="q"))) == 2

    def test_single_candidate_skips_model(self, store_retriever, llm):
        router = LanguageModelQueryRouter(registry_of(store_retriever), llm)

        assert router.route(Query(text="q")) == [store_retriever]
        llm.generate.assert_not_called()

    def test_model_failure_propagates(self, retrievers, llm):
        llm.generate.side_effect = LLMResponseError("bad gateway")

        with pytest.raises(LLMResponseError):
            LanguageModelQueryRouter(retrievers, llm).route(Query(text="q"))


class TestRuleBasedQueryRouter:

    def test_matching_rule(self, retrievers, hybrid_retriever):
        router = RuleBasedQueryRouter(retrievers, [(r"\bnamed?\b", "HYBRID")])

        assert router.route(Query(text="Which NAME appears first?")) == [hybrid_retriever]

    def test_no_match_routes_to_all(self, retrievers):
        router = RuleBasedQueryRouter(retrievers, [(r"price", RetrieverKind.HYBRID)])

        assert len(router.route(Query(text="hello"))) == 2

    def test_rule_for_disabled_retriever_ignored(self, store_retriever):
        retrievers = registry_of(store_retriever, StubRetriever(RetrieverKind.HYBRID, enabled=False))
        router = RuleBasedQueryRouter(retrievers, [("x", "HYBRID")])

        assert router.route(Query(text="x")) == [store_retriever]

    def test_parse_rules(self):
        assert parse_rules({"price": "HYBRID"}) == [("price", "HYBRID")]
        assert parse_rules(None) == []


class TestRoundRobinQueryRouter:

    def test_rotates(self, retrievers, store_retriever, hybrid_retriever):
        router = RoundRobinQueryRouter(retrievers)

        routed = [router.route(Query(text="q")) for _ in range(3)]

        assert routed == [[store_retriever], [hybrid_retriever], [store_retriever]]


class TestRouterRegistry:

    def test_without_model(self, retrievers):
        registry = build_router_registry(retrievers)

        assert QueryRouterKind.LANGUAGE_MODEL not in registry
        assert len(registry) == 3

    def test_with_model(self, retrievers, llm):
        registry = build_router_registry(retrievers, llm_client=llm)

        assert registry.is_supported("language-model")

    def test_select_language_model_falls_back(self, retrievers):
        registry = build_router_registry(retrievers)

        assert select_router(registry, "LANGUAGE_MODEL").kind == QueryRouterKind.DEFAULT
        assert select_router(registry, "ROUND_ROBIN").kind == QueryRouterKind.ROUND_ROBIN

    def test_select_unknown(self, retrievers):
        with pytest.raises(UnsupportedStrategyKind, match="Unsupported QueryRouter kind: RANDOM"):
            select_router(build_router_registry(retrievers), "RANDOM")
