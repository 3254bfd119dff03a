import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from engine import PaymentsEngine


class TestPaymentsEngineLargeScale:
    def test_1000_accounts_6000_transactions(self, tmp_path):
        num_clients = 1000
        rows = ["type, client, tx, amount"]
        tx_id = 1

        # Each client: deposits 100, 200, 300 and withdrawals 50, 100 = 450
        for client_id in range(1, num_clients + 1):
            for kind, amount in (
                ("deposit", 100),
                ("deposit", 200),
                ("deposit", 300),
                ("withdrawal", 50),
                ("withdrawal", 100),
            ):
                rows.append(f"{kind}, {client_id}, {tx_id}, {amount}")
                tx_id += 1

        # Second pass interleaves clients: +50 each
        for client_id in range(1, num_clients + 1):
            rows.append(f"deposit, {client_id}, {tx_id}, 50")
            tx_id += 1

        csv_file = tmp_path / "large_test.csv"
        csv_file.write_text('\n'.join(rows))

        engine = PaymentsEngine()
        accounts = engine.process_file(str(csv_file))

        assert len(accounts) == num_clients
        assert engine.stats.processed == 6000
        assert engine.stats.rejected == 0

        for client_id in range(1, num_clients + 1):
            assert accounts[client_id].available == Decimal("500"), \
                f"Client {client_id}: expected 500, got {accounts[client_id].available}"
            assert accounts[client_id].held == Decimal("0")
            assert accounts[client_id].locked is False

    def test_with_disputes_resolves_chargebacks(self, tmp_path):
        rows = ["type, client, tx, amount"]

        def deposits(clients, amounts):
            for client_id in clients:
                for i, amount in enumerate(amounts, start=1):
                    rows.append(f"deposit, {client_id}, {client_id * 100 + i}, {amount}")

        def reference(kind, clients, offset):
            for client_id in clients:
                rows.append(f"{kind}, {client_id}, {client_id * 100 + offset},")

        # 1-10: deposits only
        deposits(range(1, 11), (100, 150, 250))

        # 11-20: dispute then resolve the first deposit
        deposits(range(11, 21), (100, 150, 250))
        reference("dispute", range(11, 21), 1)
        reference("resolve", range(11, 21), 1)

        # 21-30: dispute then chargeback the first deposit
        deposits(range(21, 31), (100, 150, 250))
        reference("dispute", range(21, 31), 1)
        reference("chargeback", range(21, 31), 1)

        # 31-40: withdraw, then dispute the first deposit
        for client_id in range(31, 41):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 150")
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 250")
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 3}, 100")
        reference("dispute", range(31, 41), 1)

        # 41-50: dispute the withdrawal
        for client_id in range(41, 51):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 1}, 300")
            rows.append(f"withdrawal, {client_id}, {client_id * 100 + 2}, 120")
        reference("dispute", range(41, 51), 2)

        # 51-60: chargeback without prior dispute, then more deposits
        deposits(range(51, 61), (100,))
        reference("chargeback", range(51, 61), 1)
        for client_id in range(51, 61):
            rows.append(f"deposit, {client_id}, {client_id * 100 + 2}, 999")

        # 61-70: only references to unknown transactions
        reference("dispute", range(61, 71), 1)
        reference("resolve", range(61, 71), 1)

        csv_file = tmp_path / "disputes_test.csv"
        csv_file.write_text('\n'.join(rows))

        accounts = PaymentsEngine().process_file(str(csv_file))

        for client_id in range(1, 21):
            assert accounts[client_id].available == Decimal("500"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("0")
            assert accounts[client_id].locked is False

        for client_id in range(21, 31):
            assert accounts[client_id].available == Decimal("400"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("100")
            assert accounts[client_id].total == Decimal("500")
            assert accounts[client_id].locked is True

        for client_id in range(31, 41):
            assert accounts[client_id].available == Decimal("150"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("150")
            assert accounts[client_id].total == Decimal("300")
            assert accounts[client_id].locked is False

        for client_id in range(41, 51):
            assert accounts[client_id].available == Decimal("180"), f"Client {client_id}"
            assert accounts[client_id].held == Decimal("120")
            assert accounts[client_id].total == Decimal("300")

        for client_id in range(51, 61):
            assert accounts[client_id].available == Decimal("100"), f"Client {client_id}"
            assert accounts[client_id].locked is True

        for client_id in range(61, 71):
            assert client_id not in accounts
