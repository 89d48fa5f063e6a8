# src/bigfile_explorer/cli/cli.py
import argparse
import asyncio
import sys
from typing import List, Optional

import aiohttp
import uvicorn
from fastapi import HTTPException

from ..api.server import create_app
from ..config.settings import ExplorerConfig
from ..exceptions import ExplorerError
from ..explorer.aggregator import DashboardAggregator, DashboardSettings
from ..explorer.api import ExplorerAPI
from ..monitoring.logging_config import LogConfig
from ..monitoring.metrics import parse_metrics
from ..node.client import NodeClient
from ..utils.config import Config
from ..utils.format import format_block_time, format_bytes, format_number, format_time_ago

class CLI:
    def __init__(self):
        self.config: Optional[ExplorerConfig] = None

    def main(self, args: List[str]) -> int:
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return 1

        try:
            self.config = ExplorerConfig(args.config)
            return args.func(args) or 0
        except ExplorerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='BigFile explorer backend')
        parser.add_argument('--config', default='config/explorer.yaml', help='Path to YAML config')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Run the HTTP API')
        serve.add_argument('--host', help='Bind address')
        serve.add_argument('--port', type=int, help='Bind port')
        serve.set_defaults(func=self.serve)

        stats = subparsers.add_parser('stats', help='Print current network stats')
        stats.set_defaults(func=self.show_stats)

        block = subparsers.add_parser('block', help='Show a block by height or hash')
        block.add_argument('block_id', help='Block height or hash')
        block.set_defaults(func=self.show_block)

        tx = subparsers.add_parser('tx', help='Show a transaction')
        tx.add_argument('tx_id', help='Transaction id')
        tx.set_defaults(func=self.show_transaction)

        metrics = subparsers.add_parser('metrics', help='Read /api/metrics from a running explorer')
        metrics.add_argument('--url', default=f'http://localhost:{Config.PORT}', help='Explorer base URL')
        metrics.set_defaults(func=self.show_metrics)

        init_config = subparsers.add_parser('init-config', help='Write the default config file')
        init_config.set_defaults(func=self.init_config)

        return parser

    def serve(self, args):
        LogConfig(
            log_dir=self.config.get('monitoring.log_dir', Config.LOG_DIR),
            level=self.config.get('monitoring.log_level', Config.LOG_LEVEL)
        ).setup_logging()

        host = args.host or self.config.get('server.host', Config.HOST)
        port = args.port or self.config.get('server.port', Config.PORT)
        uvicorn.run(create_app(self.config), host=host, port=port)

    def show_stats(self, args):
        async def run():
            async with NodeClient.from_config(self.config) as client:
                aggregator = DashboardAggregator(client, settings=DashboardSettings.from_config(self.config))
                return await aggregator.build_snapshot()

        snapshot = asyncio.run(run())
        current = snapshot.current
        print(f"Height:        {format_number(current.height)}")
        print(f"Peers:         {format_number(current.peer_count)}")
        print(f"Transactions:  {format_number(current.total_transactions)}")
        print(f"TPS:           {current.tps}")
        print(f"Weave size:    {format_bytes(current.weave_size)}")
        print(f"Network size:  {format_bytes(current.network_size)}")
        print("Recent blocks:")
        for block in snapshot.recent_blocks:
            print(
                f"  {block.height:>10}  {block.hash[:16]:<16}  {block.tx_count:>4} tx  "
                f"{format_bytes(block.size):>10}  {format_block_time(block.timestamp)}"
            )

    def show_block(self, args):
        block = self._run_explorer(lambda explorer: explorer.get_block(args.block_id))
        if block is None:
            return 1
        print(f"Height:    {block.height}")
        print(f"Hash:      {block.hash}")
        print(f"Previous:  {block.previous_block}")
        print(f"Time:      {format_time_ago(block.timestamp)}")
        print(f"Size:      {format_bytes(block.size)}")
        print(f"Miner:     {block.miner}")
        print(f"Txs:       {len(block.txs)}")
        for tx in block.transactions:
            print(f"  {tx.id}  {format_bytes(tx.data_size)}")

    def show_transaction(self, args):
        tx = self._run_explorer(lambda explorer: explorer.get_transaction(args.tx_id))
        if tx is None:
            return 1
        print(f"Id:         {tx.id}")
        print(f"Block:      {tx.block_height} {tx.block_hash}")
        print(f"Owner:      {tx.owner}")
        print(f"Target:     {tx.target}")
        print(f"Fee:        {format_number(tx.fee)}")
        print(f"Data size:  {format_bytes(tx.data_size)}")
        print(f"Data root:  {tx.data_root}")

    def _run_explorer(self, call):
        async def run():
            async with NodeClient.from_config(self.config) as client:
                return await call(ExplorerAPI.from_config(client, self.config))

        try:
            return asyncio.run(run())
        except HTTPException as e:
            print(f"Error: {e.detail}", file=sys.stderr)
            return None

    def show_metrics(self, args):
        async def fetch() -> str:
            async with aiohttp.ClientSession() as session:
                async with session.get(f"{args.url.rstrip('/')}/api/metrics") as response:
                    response.raise_for_status()
                    return await response.text()

        try:
            text = asyncio.run(fetch())
        except aiohttp.ClientError as e:
            print(f"Error: could not read metrics from {args.url}: {e}", file=sys.stderr)
            return 1

        metrics = parse_metrics(text, self.config.get('monitoring.metrics_prefix', Config.METRICS_PREFIX))
        print(f"Height:              {format_number(metrics.height)}")
        print(f"Peers:               {format_number(metrics.peer_count)}")
        print(f"Storage size:        {format_bytes(metrics.total_size)}")
        print(f"Hash rate:           {metrics.hash_rate:g}")
        print(f"TPS:                 {metrics.tps:g}")
        print(f"Latest block txs:    {metrics.total_transactions}")
        print(f"Average block size:  {format_bytes(metrics.average_block_size)}")

    def init_config(self, args):
        self.config.save()
        print(f"Wrote {self.config.config_path}")

def main():
    sys.exit(CLI().main(sys.argv[1:]))
