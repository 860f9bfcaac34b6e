from dependency_injector import containers, providers

from sanctionlog.config import settings as app_settings
from sanctionlog.infra.blockchain.evm.rpc_client import EVMRPCClient
from sanctionlog.infra.blockchain.evm.tx_fetcher import TransactionFetcher
from sanctionlog.infra.http.rate_limited_client import RateLimitedClient
from sanctionlog.parser.classifier import LogClassifier
from sanctionlog.parser.topics import build_default_registry
from sanctionlog.reconcile.engine import ReconciliationEngine
from sanctionlog.report.writer import ReportWriter


class Container(containers.DeclarativeContainer):
    settings = providers.Object(app_settings)

    topic_registry = providers.Singleton(build_default_registry)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.rpc_rate_per_second,
        timeout=settings.provided.rpc_timeout,
        max_in_flight=settings.provided.max_concurrency,
    )

    rpc_client = providers.Factory(
        EVMRPCClient,
        rpc_url=settings.provided.rpc_url,
        http_client=http_client,
        max_attempts=settings.provided.rpc_max_attempts,
    )

    classifier = providers.Factory(
        LogClassifier,
        registry=topic_registry,
        max_array_length=settings.provided.max_address_array_length,
    )

    fetcher = providers.Factory(
        TransactionFetcher,
        rpc=rpc_client,
        classifier=classifier,
    )

    engine = providers.Factory(
        ReconciliationEngine,
        fetcher=fetcher,
        max_concurrency=settings.provided.max_concurrency,
    )

    report_writer = providers.Factory(
        ReportWriter,
        output_path=settings.provided.output_path,
    )
