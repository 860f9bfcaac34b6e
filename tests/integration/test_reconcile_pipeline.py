"""End-to-end: JSON-RPC over httpx mock transport -> engine -> snapshot file."""

import json

import httpx
from tenacity import wait_none

from sanctionlog.infra.blockchain.evm.rpc_client import EVMRPCClient
from sanctionlog.infra.blockchain.evm.tx_fetcher import TransactionFetcher
from sanctionlog.infra.http.rate_limited_client import RateLimitedClient
from sanctionlog.reconcile.engine import ReconciliationEngine
from sanctionlog.report.writer import ReportWriter, load_net_addresses

from conftest import addr, tx_hash

RPC_URL = "https://rpc.example.org"


class TestReconcilePipeline:
    async def test_full_run(self, tmp_path, classifier, rpc_log):
        attempts: dict[str, int] = {}
        receipts = {
            tx_hash(1): {
                "transactionHash": tx_hash(1),
                "blockNumber": "0x100",
                "logs": [
                    rpc_log("added", [addr(1), addr(2), addr(3)], tx=tx_hash(1), block=0x100, log_index=0),
                ],
            },
            tx_hash(3): {
                "transactionHash": tx_hash(3),
                "blockNumber": "0x102",
                "logs": [
                    rpc_log(None, data="0x", tx=tx_hash(3), block=0x102, log_index=0),
                    rpc_log("removed", [addr(2)], tx=tx_hash(3), block=0x102, log_index=1),
                ],
            },
        }

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            h = body["params"][0]
            attempts[h] = attempts.get(h, 0) + 1
            if h == tx_hash(4) and attempts[h] == 1:
                return httpx.Response(502)
            if h == tx_hash(4):
                return httpx.Response(200, json={
                    "jsonrpc": "2.0", "id": body["id"],
                    "result": {"blockNumber": "0x103", "logs": [
                        rpc_log("added", [addr(4)], tx=tx_hash(4), block=0x103, log_index=0),
                    ]},
                })
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": receipts.get(h)})

        async with RateLimitedClient(rate_per_second=1000, transport=httpx.MockTransport(handler)) as http:
            rpc = EVMRPCClient(RPC_URL, http, max_attempts=2, retry_wait=wait_none())
            engine = ReconciliationEngine(TransactionFetcher(rpc, classifier), max_concurrency=2)
            report = await engine.run([tx_hash(1), tx_hash(2), tx_hash(3), tx_hash(4)])

        assert [f.tx_hash for f in report.failures] == [tx_hash(2)]
        assert [s.tx_hash for s in report.successes] == [tx_hash(1), tx_hash(3), tx_hash(4)]
        assert attempts[tx_hash(4)] == 2
        assert report.net_addresses == sorted([addr(1), addr(3), addr(4)])

        path = ReportWriter(tmp_path / "sanction_events.json").write(report)
        artifact = json.loads(path.read_text())
        assert artifact["summary"]["totalTransactions"] == 4
        assert artifact["summary"]["totalSanctionEvents"] == 3
        assert load_net_addresses(path) == report.net_addresses
