import logging
from typing import Sequence

from nethermind.evm_rpc.exceptions import DecodingError
from nethermind.evm_rpc.types.decoding import DecodedEvent
from nethermind.evm_rpc.types.rpc import EventLogRecord
from nethermind.evm_rpc.utils import to_bytes

from .contract import ContractInterface
from .event_decoders import build_json_view

root_logger = logging.getLogger("nethermind")
logger = root_logger.getChild("evm_rpc").getChild("decoding")


def decode_log(record: EventLogRecord, interface: ContractInterface) -> DecodedEvent:
    """
    Decodes a raw event log against a contract interface.  If no event in the interface matches topics[0], an
    unsuccessful DecodedEvent is returned instead of raising.

    :param record: Raw log.  Must carry at least one topic
    :param interface: ContractInterface to decode with
    :return: DecodedEvent
    """
    if not record.topics:
        raise DecodingError(f"Cannot decode log without topics from transaction {record.transaction_hash}")

    topics = [to_bytes(topic) for topic in record.topics]
    event_decoder = interface.event(topics[0])

    if event_decoder is None:
        logger.debug(f"No event in ABI matches signature {record.topics[0]}")
        return DecodedEvent(event_name="", params=[], success=False, error_msg="", data="null")

    params = event_decoder.decode(topics, to_bytes(record.data))

    return DecodedEvent(
        event_name=event_decoder.name,
        params=params,
        success=True,
        error_msg="",
        data=build_json_view(params),
        block_number=record.block_number,
        transaction_hash=record.transaction_hash,
    )


def decode_batch(records: Sequence[EventLogRecord], interface: ContractInterface) -> list[DecodedEvent]:
    """
    Decodes a sequence of logs with a single contract interface.  Output order matches input order, and
    unmatched logs are returned as unsuccessful DecodedEvents rather than dropped.
    """
    return [decode_log(record, interface) for record in records]
