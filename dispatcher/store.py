from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from pydantic import ValidationError
from .constant import Counter
from .exception import (
    AggregateNotMatchedError,
    AggregateStoreError,
    PersistenceError,
    ProblemLookupError,
)
from .models import ProblemTemplate, Submission


class ProblemStore:
    '''
    Problem documents: per-language templates and correctness counters

    A problem document looks like
    {
        '_id': ObjectId,
        'problemId': str,
        'templates': {language: template},
        'submissions': {'correct': int, 'wrong': int},
    }
    '''

    def __init__(self, collection: Collection):
        self.collection = collection

    def get_template(self, que_id: str, language: str) -> ProblemTemplate:
        try:
            problem = self.collection.find_one(
                {'problemId': que_id},
                projection={f'templates.{language}': 1},
            )
        except PyMongoError as e:
            raise ProblemLookupError(
                f'cannot read problem [id={que_id}]: {e}') from e
        if problem is None:
            raise ProblemLookupError(f'problem not found [id={que_id}]')
        template = problem.get('templates', {}).get(language)
        if template is None:
            raise ProblemLookupError(
                f'no {language} template [id={que_id}]')
        try:
            return ProblemTemplate(
                queId=que_id,
                language=language,
                template=template,
            )
        except ValidationError as e:
            raise ProblemLookupError(
                f'invalid {language} template [id={que_id}]: {e}') from e

    def increment(self, que_id: str, status: bool) -> Counter:
        '''
        Atomically add one to the correct or wrong counter of a problem

        Returns:
            the counter which was increased
        Raises:
            AggregateStoreError: the update could not be done
            AggregateNotMatchedError: the update matched no document
        '''
        counter = Counter.from_status(status)
        try:
            _id = ObjectId(que_id)
        except (InvalidId, TypeError) as e:
            raise AggregateStoreError(f'invalid problem id {que_id!r}') from e
        try:
            result = self.collection.update_one(
                {'_id': _id},
                {'$inc': {counter.value: 1}},
            )
        except PyMongoError as e:
            raise AggregateStoreError(
                f'cannot update {counter.value} [id={que_id}]: {e}') from e
        if result.modified_count == 0:
            raise AggregateNotMatchedError(
                f'no document updated [id={que_id}, field={counter.value}]')
        return counter


class SubmissionStore:
    '''
    Append-only log of graded submissions
    '''

    def __init__(self, collection: Collection):
        self.collection = collection

    def insert(self, submission: Submission) -> ObjectId:
        try:
            document = submission.model_dump()
            document['queId'] = ObjectId(submission.queId)
        except (InvalidId, TypeError) as e:
            raise PersistenceError(
                f'invalid problem id {submission.queId!r}') from e
        try:
            return self.collection.insert_one(document).inserted_id
        except PyMongoError as e:
            raise PersistenceError(
                f'cannot insert submission [pid={submission.pid}]: {e}'
            ) from e
