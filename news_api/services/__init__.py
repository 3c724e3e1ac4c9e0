# Services package.
#
# Each module exposes async functions that validate input and talk to the
# database for one resource:
#
#   article_service: filtered/sorted/paginated listing, detail, create, votes
#   comment_service: paginated listing per article, create, votes, delete
#   topic_service: list and create topics
#   user_service: list users, look up by username
#   existence: allow-listed row existence checks
#   pagination: limit/page parsing shared by the listings
#
# All service functions accept an AsyncSession as their first argument
# so that the router layer controls the transaction boundary via the
# ``get_db`` dependency.  Failures are raised as ``news_api.exceptions``
# errors.
