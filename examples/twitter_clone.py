"""Two systems behind API gateways, talking to each other over gRPC.

    neoarch save examples/twitter_clone.py
    neoarch export dsl examples/twitter_clone.py --output twitter.dsl
"""

from __future__ import annotations

from neoarch import Design

design = Design("Twitter Clone", "Social + User Systems with API Gateway, GraphQL, gRPC")

# --- User system ---

user_system = design.system("UserSystem", "Handles user management and authentication")

user_gateway = user_system.container("User API Gateway", "HTTP entrypoint").tag("gateway")
user_graphql = (
    user_system.container("User GraphQL", "Orchestrates queries and mutations")
    .tag("graphql")
    .uses(user_gateway, "Receives traffic from")
)
user_db = user_system.container("User DB", "Stores user info").tag("db")
user_s3 = user_system.container("User S3", "Stores avatars").tag("s3")
user_temporal = user_system.container("User Temporal Worker", "Handles background workflows").tag(
    "temporal"
)

user_service = (
    user_system.container("User gRPC Service", "Handles core user operations")
    .tag("grpc")
    .uses(user_db, "Reads/writes user data")
    .uses(user_s3, "Stores profile images")
    .uses(user_temporal, "Schedules background jobs")
)
user_graphql.uses(user_service, "Resolves user operations")

user_graphql.component("Schema Definition", "Defines User types and fields")
user_graphql.component("Query Resolver", "Handles fetching user data")
user_graphql.component("Mutation Resolver", "Handles signup, update, etc.")
user_graphql.component("Middleware", "Cross-cutting GraphQL logic")
user_graphql.component("Authorization", "Enforces auth rules")

user_service.component("Handler", "Request-level handling")
user_service.component("Service", "Business logic")
user_service.component("Repository", "Persistence layer")

# --- Social system ---

social_system = design.system("SocialSystem", "Handles tweets, follows, feeds")

social_gateway = social_system.container("Social API Gateway", "HTTP entrypoint").tag("gateway")
social_graphql = (
    social_system.container("Social GraphQL", "Manages tweet/feed queries")
    .tag("graphql")
    .uses(social_gateway, "Receives traffic from")
)
social_db = social_system.container("Social DB", "Stores tweets, follows").tag("db")
social_s3 = social_system.container("Social S3", "Stores tweet media").tag("s3")
social_temporal = social_system.container(
    "Social Temporal Worker", "Feed generation and cleanup"
).tag("temporal")

tweet_service = (
    social_system.container("Tweet gRPC Service", "Tweet logic")
    .tag("grpc")
    .uses(social_db, "Reads/writes tweet data")
    .uses(social_s3, "Stores media")
    .uses(social_temporal, "Schedules tweet workflows")
)
follow_service = (
    social_system.container("Follow gRPC Service", "Follow/unfollow logic")
    .tag("grpc")
    .uses(social_db, "Updates following/follower lists")
    .uses(social_temporal, "Schedules notifications")
)

social_graphql.uses(tweet_service, "Resolves tweet ops")
social_graphql.uses(follow_service, "Resolves follow ops")

# Inter-system calls lift to IMPLIED_USE(SocialSystem, UserSystem).
tweet_service.uses(user_service, "Fetch user profile info for tweets")
follow_service.uses(user_service, "Resolve target user")

social_graphql.component("Schema Definition", "Defines Tweet and Feed types")
social_graphql.component("Query Resolver", "Handles fetching tweets/feed")
social_graphql.component("Mutation Resolver", "Creates tweets, follows")
social_graphql.component("Middleware", "Logging, timing, tracing")
social_graphql.component("Authorization", "Check user permissions")

tweet_service.component("Handler", "gRPC entrypoint")
tweet_service.component("Service", "Tweet logic")
tweet_service.component("Repository", "Tweet persistence")

follow_service.component("Handler", "gRPC entrypoint")
follow_service.component("Service", "Follow logic")
follow_service.component("Repository", "Follow persistence")
