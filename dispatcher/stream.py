from confluent_kafka import Consumer
from .config import (
    KAFKA_BROKER,
    RUN_GROUP,
    RUN_TOPIC,
    SUBMIT_GROUP,
    SUBMIT_TOPIC,
)
from .utils import logger


def open_reader(
    topic: str,
    group_id: str,
    broker: str = KAFKA_BROKER,
) -> Consumer:
    '''
    Create a consumer which reads `topic` as member of `group_id`
    '''
    logger().debug(
        f'open stream reader [topic={topic}, group={group_id}, broker={broker}]'
    )
    consumer = Consumer({
        'bootstrap.servers': broker,
        'group.id': group_id,
        'auto.offset.reset': 'earliest',
    })
    consumer.subscribe([topic])
    return consumer


def open_sources(broker: str = KAFKA_BROKER):
    '''
    The two request streams, keyed by a short name
    '''
    return {
        'submit': open_reader(SUBMIT_TOPIC, SUBMIT_GROUP, broker),
        'run': open_reader(RUN_TOPIC, RUN_GROUP, broker),
    }
