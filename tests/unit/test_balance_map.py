"""
Balance Map Unit Tests
Tests for core/distribution/balance_map.py
"""
import pytest

from core.crypto.leaf_encoding import checksum_account
from core.distribution import build_distribution, normalize_balances, parse_balance_map
from core.merkle import BalanceTree, verify_claim_proof
from core.schemas.distribution import DistributionDocument, Entry
from core.schemas.errors import (
    AllocationError,
    DuplicateAccountError,
    EmptyTreeError,
    ErrorCodes,
)
from fixtures import ALICE, BOB, make_address


class TestNormalizeBalances:

    def test_sorted_by_checksum_address(self):
        entries = normalize_balances({BOB: 2, ALICE: 1})
        assert [e.account for e in entries] == [ALICE, BOB]
        assert [e.amount for e in entries] == [1, 2]

    def test_list_form_with_address_and_earnings(self):
        entries = normalize_balances([
            {"address": BOB, "earnings": "0x0a"},
            {"address": ALICE, "earnings": 5},
        ])
        assert [(e.account, e.amount) for e in entries] == [(ALICE, 5), (BOB, 10)]

    def test_list_form_with_account_and_amount(self):
        entries = normalize_balances([{"account": ALICE, "amount": "7"}])
        assert entries == [Entry(account=ALICE, amount=7)]

    def test_input_order_does_not_matter(self):
        forward = normalize_balances({make_address(i): i for i in range(1, 6)})
        backward = normalize_balances({make_address(i): i for i in range(5, 0, -1)})
        assert forward == backward

    def test_duplicate_in_different_case(self):
        lower = "0x" + "ab" * 20
        upper = "0x" + "AB" * 20
        with pytest.raises(DuplicateAccountError) as exc_info:
            normalize_balances([
                {"address": lower, "earnings": 1},
                {"address": upper, "earnings": 2},
            ])
        assert exc_info.value.code == ErrorCodes.DUPLICATE_ACCOUNT
        assert exc_info.value.account == checksum_account(lower)

    def test_zero_amount_rejected(self):
        with pytest.raises(AllocationError, match="positive"):
            normalize_balances({ALICE: 0})

    def test_invalid_address_rejected(self):
        with pytest.raises(AllocationError) as exc_info:
            normalize_balances({"0x1234": 1})
        assert exc_info.value.code == ErrorCodes.ALLOCATION_INVALID

    def test_invalid_amount_rejected(self):
        with pytest.raises(AllocationError):
            normalize_balances({ALICE: "lots"})

    def test_record_missing_fields(self):
        with pytest.raises(AllocationError, match="address and an amount"):
            normalize_balances([{"address": ALICE}])

    def test_record_not_an_object(self):
        with pytest.raises(AllocationError, match="must be an object"):
            normalize_balances([[ALICE, 1]])


class TestParseBalanceMap:

    def test_document_shape(self):
        document = parse_balance_map({BOB: 2, ALICE: 1})

        assert document.merkle_root == BalanceTree([(ALICE, 1), (BOB, 2)]).hex_root
        assert document.token_total == "0x03"
        assert set(document.claims) == {ALICE, BOB}
        assert document.claims[ALICE].index == 0
        assert document.claims[ALICE].amount == "0x01"
        assert document.claims[BOB].index == 1

    def test_every_proof_verifies(self):
        document = parse_balance_map({make_address(i): i * 1000 for i in range(1, 8)})
        for account, info in document.claims.items():
            amount = int(info.amount, 16)
            assert verify_claim_proof(info.index, account, amount, info.proof, document.merkle_root)

    def test_entries_rebuild_same_root(self):
        document = parse_balance_map({make_address(i): i for i in range(1, 6)})
        assert BalanceTree(document.entries()).hex_root == document.merkle_root

    def test_camel_case_serialization(self):
        document = parse_balance_map({ALICE: 1})
        dumped = document.model_dump(by_alias=True)
        assert set(dumped) == {"merkleRoot", "tokenTotal", "claims"}

    def test_empty_map(self):
        with pytest.raises(EmptyTreeError):
            parse_balance_map({})


class TestBuildDistribution:

    def test_keeps_given_order(self):
        document = build_distribution([Entry(account=BOB, amount=1), Entry(account=ALICE, amount=1)])
        assert document.claims[BOB].index == 0
        assert document.claims[ALICE].index == 1

    def test_duplicate_accounts_rejected(self):
        with pytest.raises(DuplicateAccountError):
            build_distribution([Entry(account=ALICE, amount=1), Entry(account=ALICE, amount=2)])

    @pytest.mark.parametrize("amount,expected", [(0, "0x00"), (1, "0x01"), (255, "0xff"), (256, "0x0100")])
    def test_hex_amount(self, amount, expected):
        assert DistributionDocument.hex_amount(amount) == expected
