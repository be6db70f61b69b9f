"""High-level client for databases, collections, documents and offers.

Architecture:
    DocumentClient is the single entry point callers use. Single-request
    operations are described declaratively as RestEndpointSpec constants and
    executed by a RestRunner; SQL queries go through the QueryExecutor,
    which follows continuation tokens and merges pages. Both sign every
    request with the master key from ConnectionInfo.

Design Decisions:
    - Async context manager: the underlying aiohttp session is closed on exit
    - Injected clock and sleep: deterministic tests without patching
    - RequestOptions: partition key, consistency level, session token and
      user agent travel together and are rendered into headers in one place
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from ..auth.signer import Clock, utc_now
from ..core.config import ConnectionInfo, RequestOptions
from ..core.constants import (
    DEFAULT_MAX_ITEM_COUNT,
    DELETE_BATCH_SIZE,
    HEADER_ENABLE_CROSS_PARTITION,
)
from ..core.exceptions import ConfigurationError
from ..endpoints import ExistsAdapter, OperationAdapter, collections, databases, documents, offers
from ..models import Collection, CountResult, ExistsResult, Offer, OperationResult
from ..runtime.pagination import QueryExecutor, QueryResult, RetryPolicy, Sleep
from ..runtime.rest import RESTTransport, RestRunner, Transport

logger = logging.getLogger(__name__)


class DocumentClient:
    """Async client bound to one account (and optionally one database and collection).

    Example:
        >>> info = ConnectionInfo(
        ...     account_url="https://myaccount.documents.azure.com",
        ...     primary_or_secondary_key="...",
        ...     database_id="ToDoList",
        ...     collection_id="Items",
        ... )
        >>> async with DocumentClient(info) as client:
        ...     result = await client.select_documents("SELECT * FROM c")
        ...     print(result.documents, result.request_charge)
    """

    def __init__(
        self,
        connection: ConnectionInfo,
        *,
        timeout: float = 30.0,
        transport: Transport | None = None,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        """Initialize client.

        Args:
            connection: Account URL, master key and default database/collection ids
            timeout: Total request timeout in seconds for the default transport
            transport: Optional transport replacing the aiohttp-backed default
            clock: Source of request timestamps
            sleep: Awaitable used to wait out rate limiting
            retry_policy: Bounds for rate-limit retries of queries
        """
        self.connection = connection
        self._owns_transport = transport is None
        self._transport: Transport = transport or RESTTransport(
            base_url=connection.account_url, timeout=timeout
        )
        key = connection.primary_or_secondary_key
        self._runner = RestRunner(self._transport, key, clock=clock)
        self._executor = QueryExecutor(
            self._transport, key, clock=clock, sleep=sleep, retry_policy=retry_policy
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the default transport. Injected transports are left open."""
        if self._owns_transport and isinstance(self._transport, RESTTransport):
            await self._transport.close()

    async def __aenter__(self) -> DocumentClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _database_id(self, database_id: str | None) -> str:
        value = database_id or self.connection.database_id
        if not value:
            raise ConfigurationError("database_id is required for this operation")
        return value

    def _collection_id(self, collection_id: str | None) -> str:
        value = collection_id or self.connection.collection_id
        if not value:
            raise ConfigurationError("collection_id is required for this operation")
        return value

    def _collection_link(self) -> str:
        return f"dbs/{self._database_id(None)}/colls/{self._collection_id(None)}"

    def _collection_params(self, **extra: Any) -> dict[str, Any]:
        return {
            "database_id": self._database_id(None),
            "collection_id": self._collection_id(None),
            **extra,
        }

    @staticmethod
    def _with_session(options: RequestOptions | None, session_token: str | None) -> RequestOptions:
        options = options or RequestOptions()
        if session_token:
            return options.model_copy(update={"session_token": session_token})
        return options

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    async def create_database(
        self, database_id: str | None = None, options: RequestOptions | None = None
    ) -> OperationResult:
        """Create a database."""
        params = {"database_id": self._database_id(database_id), "options": options}
        return await self._runner.run(
            spec=databases.CREATE_SPEC, adapter=OperationAdapter(), params=params
        )

    async def delete_database(
        self, database_id: str | None = None, options: RequestOptions | None = None
    ) -> OperationResult:
        """Delete a database and everything in it."""
        params = {"database_id": self._database_id(database_id), "options": options}
        return await self._runner.run(
            spec=databases.DELETE_SPEC, adapter=OperationAdapter(), params=params
        )

    async def exists_database(
        self, database_id: str | None = None, options: RequestOptions | None = None
    ) -> ExistsResult:
        """Check whether a database exists (404 maps to False)."""
        params = {"database_id": self._database_id(database_id), "options": options}
        return await self._runner.run(
            spec=databases.EXISTS_SPEC, adapter=ExistsAdapter(), params=params
        )

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def get_collections(
        self, database_id: str | None = None, options: RequestOptions | None = None
    ) -> OperationResult:
        """List collections of a database. ``resource`` holds Collection models."""
        params = {"database_id": self._database_id(database_id), "options": options}
        return await self._runner.run(
            spec=collections.LIST_SPEC, adapter=collections.CollectionsAdapter(), params=params
        )

    async def create_collection(
        self,
        collection_id: str | None = None,
        *,
        database_id: str | None = None,
        throughput: int | None = None,
        partition_key_path: str | None = None,
        indexing_policy: dict[str, Any] | None = None,
        options: RequestOptions | None = None,
    ) -> OperationResult:
        """Create a collection, optionally partitioned and with provisioned throughput."""
        params = {
            "database_id": self._database_id(database_id),
            "collection_id": self._collection_id(collection_id),
            "throughput": throughput,
            "partition_key_path": partition_key_path,
            "indexing_policy": indexing_policy,
            "options": options,
        }
        return await self._runner.run(
            spec=collections.CREATE_SPEC, adapter=OperationAdapter(), params=params
        )

    async def delete_collection(
        self,
        collection_id: str | None = None,
        *,
        database_id: str | None = None,
        options: RequestOptions | None = None,
    ) -> OperationResult:
        """Delete a collection."""
        params = {
            "database_id": self._database_id(database_id),
            "collection_id": self._collection_id(collection_id),
            "options": options,
        }
        return await self._runner.run(
            spec=collections.DELETE_SPEC, adapter=OperationAdapter(), params=params
        )

    async def exists_collection(
        self,
        collection_id: str | None = None,
        *,
        database_id: str | None = None,
        options: RequestOptions | None = None,
    ) -> ExistsResult:
        """Check whether a collection exists (404 maps to False)."""
        params = {
            "database_id": self._database_id(database_id),
            "collection_id": self._collection_id(collection_id),
            "options": options,
        }
        return await self._runner.run(
            spec=collections.EXISTS_SPEC, adapter=ExistsAdapter(), params=params
        )

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def get_document(
        self, document_id: str, options: RequestOptions | None = None
    ) -> OperationResult:
        """Read one document by id. ``resource`` holds the decoded document."""
        params = self._collection_params(document_id=document_id, options=options)
        return await self._runner.run(
            spec=documents.GET_SPEC, adapter=OperationAdapter(), params=params
        )

    async def upsert_document(
        self, document: dict[str, Any] | str, options: RequestOptions | None = None
    ) -> OperationResult:
        """Insert or replace a document (dict or serialized JSON)."""
        params = self._collection_params(document=document, options=options)
        return await self._runner.run(
            spec=documents.UPSERT_SPEC, adapter=OperationAdapter(), params=params
        )

    async def upsert_documents(
        self,
        docs: Iterable[dict[str, Any]],
        *,
        partition_key_field: str | None = None,
        options: RequestOptions | None = None,
    ) -> OperationResult:
        """Upsert documents one after another.

        Each document's ``id`` is sent as a string. When ``partition_key_field``
        is given, that field's value is used as the partition key of each
        request. The session token of one upsert is passed to the next.
        """
        total_charge = 0.0
        session_token = options.session_token if options else None
        count = 0
        for doc in docs:
            doc = dict(doc)
            if "id" in doc:
                doc["id"] = str(doc["id"])
            current = self._with_session(options, session_token)
            if partition_key_field:
                current = current.model_copy(
                    update={"partition_key": str(doc.get(partition_key_field, ""))}
                )
            result = await self.upsert_document(doc, options=current)
            total_charge += result.request_charge
            session_token = result.session_token or session_token
            count += 1

        logger.debug("Upserted documents", extra={"count": count, "request_charge": total_charge})
        return OperationResult(request_charge=total_charge, session_token=session_token)

    async def delete_document(
        self, document_id: str, options: RequestOptions | None = None
    ) -> OperationResult:
        """Delete one document by id."""
        params = self._collection_params(document_id=document_id, options=options)
        return await self._runner.run(
            spec=documents.DELETE_SPEC, adapter=OperationAdapter(), params=params
        )

    async def delete_documents(
        self, predicate: str = "", options: RequestOptions | None = None
    ) -> OperationResult:
        """Delete all documents, or those matching ``predicate`` (a WHERE clause body).

        Works in batches: select up to 1000 ids, delete them one by one,
        repeat until the id query comes back empty.
        """
        id_query = f"SELECT TOP {DELETE_BATCH_SIZE} c.id FROM c"
        if predicate:
            id_query = f"{id_query} WHERE {predicate}"

        total_charge = 0.0
        session_token = options.session_token if options else None
        deleted = 0
        while True:
            batch = await self.select_documents(
                id_query,
                max_items_per_page=DELETE_BATCH_SIZE,
                options=self._with_session(options, session_token),
            )
            total_charge += batch.request_charge
            session_token = batch.session_token or session_token

            ids = [record.get("id") for record in batch.documents if record.get("id") is not None]
            if not ids:
                break
            for document_id in ids:
                result = await self.delete_document(
                    str(document_id), options=self._with_session(options, session_token)
                )
                total_charge += result.request_charge
                session_token = result.session_token or session_token
                deleted += 1

        logger.info("Deleted documents", extra={"count": deleted, "request_charge": total_charge})
        return OperationResult(request_charge=total_charge, session_token=session_token)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def select_documents(
        self,
        query_text: str,
        *,
        enable_cross_partition: bool | None = None,
        max_items_per_page: int = DEFAULT_MAX_ITEM_COUNT,
        options: RequestOptions | None = None,
        deadline: float | None = None,
    ) -> QueryResult:
        """Run a SQL query against the collection and merge all pages.

        Args:
            query_text: SQL-like query
            enable_cross_partition: Defaults to True unless a partition key is set
            max_items_per_page: Page size hint sent to the service
            options: Partition key, consistency level, session token, user agent
            deadline: Optional ``time.monotonic()`` value after which paging stops
        """
        options = options or RequestOptions()
        if enable_cross_partition is None:
            enable_cross_partition = not options.partition_key
        headers = options.to_headers()
        headers[HEADER_ENABLE_CROSS_PARTITION] = str(enable_cross_partition).lower()

        return await self._executor.execute(
            self._collection_link(),
            query_text,
            headers,
            max_items_per_page,
            deadline=deadline,
        )

    async def count_documents(
        self, predicate: str = "", options: RequestOptions | None = None
    ) -> CountResult:
        """Count all documents, or those matching ``predicate``.

        Cross-partition queries return one partial count per partition;
        the partial counts are summed.
        """
        query = "SELECT count(c.id) FROM c"
        if predicate:
            query = f"{query} WHERE {predicate}"
        result = await self.select_documents(query, options=options)

        count = 0
        for record in result.documents:
            for value in record.values():
                if value is not None:
                    count += int(value)
        return CountResult(
            count=count,
            request_charge=result.request_charge,
            session_token=result.session_token,
        )

    # ------------------------------------------------------------------
    # Offers
    # ------------------------------------------------------------------

    async def get_offers(self, options: RequestOptions | None = None) -> OperationResult:
        """List all offers of the account. ``resource`` holds Offer models."""
        return await self._runner.run(
            spec=offers.LIST_SPEC, adapter=offers.OffersAdapter(), params={"options": options}
        )

    async def set_collection_throughput(
        self, throughput: int, options: RequestOptions | None = None
    ) -> OperationResult:
        """Replace the offer of the configured collection with a new throughput.

        Raises:
            ConfigurationError: If the collection or its offer cannot be found,
                or the throughput is not acceptable for the current offer
        """
        collection_id = self._collection_id(None)
        collections_result = await self.get_collections(options=options)
        matches: list[Collection] = [
            c for c in collections_result.resource if c.id == collection_id
        ]
        if len(matches) != 1:
            raise ConfigurationError(f'API did not return a collection with ID "{collection_id}"')
        collection = matches[0]

        offers_result = await self.get_offers(options=options)
        offer_matches: list[Offer] = [
            o for o in offers_result.resource if o.offer_resource_id == collection.rid
        ]
        if len(offer_matches) != 1:
            raise ConfigurationError(
                f'API did not return an offer for collection with RID "{collection.rid}"'
            )
        offer = offer_matches[0]

        value = offers.validate_throughput(throughput, offer, collection_id)
        params = {
            "collection": collection,
            "offer": offer,
            "throughput": value,
            "options": options,
        }
        return await self._runner.run(
            spec=offers.REPLACE_SPEC, adapter=OperationAdapter(), params=params
        )
