"""
Example schemas for both dialects.

These are complete, realistic inputs used by the CLI ``--example`` option
and by the test suite.
"""

EXAMPLE_DRIZZLE_SCHEMA = """\
import { pgTable, uuid, text, varchar, timestamp, integer, numeric, jsonb, pgEnum, boolean, index, uniqueIndex } from 'drizzle-orm/pg-core';
import { relations } from 'drizzle-orm';

// Audit Schema
const auditSchema = {
  createdAt: timestamp('created_at').defaultNow().notNull(),
  createdBy: uuid('created_by'),
  updatedAt: timestamp('updated_at').defaultNow().notNull(),
  updatedBy: uuid('updated_by'),
};

// Enums
export const clubMemberRoleEnum = pgEnum('club_member_role', ['owner', 'manager', 'agent', 'player']);
export const clubMemberStatusEnum = pgEnum('club_member_status', ['pending_approval', 'approved', 'suspended', 'banned']);
export const chipTransactionTypeEnum = pgEnum('chip_transaction_type', ['game_buy_in', 'game_cash_out', 'rake_collection', 'transfer', 'deposit', 'withdraw', 'bonus', 'penalty', 'refund']);
export const chipRequestTypeEnum = pgEnum('chip_request_type', ['deposit', 'withdraw']);
export const chipRequestStatusEnum = pgEnum('chip_request_status', ['pending', 'approved', 'rejected', 'processed']);
export const clubRoomStatusEnum = pgEnum('club_room_status', ['waiting', 'active', 'paused', 'completed']);
export const gameTypeEnum = pgEnum('game_type', ['NLH', 'PLO', 'PLO5', 'PLO6', 'MIXED']);
export const handStatusEnum = pgEnum('hand_status', ['in_progress', 'completed', 'cancelled']);
export const handPhaseEnum = pgEnum('game_phase', ['waiting', 'preflop', 'flop', 'turn', 'river', 'showdown', 'finished', 'collecting_chips', 'awarding_pot']);
export const authProviderEnum = pgEnum('auth_provider', ['google', 'twitter', 'facebook', 'discord']);

// Tables
export const clubUsers = pgTable('club_users', {
  id: uuid('id').primaryKey().defaultRandom(),
  email: varchar('email', { length: 255 }).notNull().unique(),
  name: varchar('name', { length: 100 }).notNull(),
  avatarUrl: text('avatar_url'),
  authProvider: authProviderEnum('auth_provider').notNull(),
  authProviderId: varchar('auth_provider_id', { length: 255 }).notNull(),
  ...auditSchema,
});

export const clubs = pgTable('clubs', {
  id: uuid('id').primaryKey().defaultRandom(),
  ownerId: uuid('owner_id').notNull(),
  name: varchar('name', { length: 100 }).notNull(),
  uniqueName: varchar('unique_name', { length: 100 }).notNull().unique(),
  inviteCode: varchar('invite_code', { length: 20 }).notNull().unique(),
  ...auditSchema,
});

export const clubMembers = pgTable('club_members', {
  id: uuid('id').primaryKey().defaultRandom(),
  clubId: uuid('club_id').notNull(),
  userId: uuid('user_id').notNull(),
  role: clubMemberRoleEnum('role').notNull().default('player'),
  status: clubMemberStatusEnum('status').notNull().default('pending_approval'),
  ...auditSchema,
});

// Relations
export const clubsRelations = relations(clubs, ({ one, many }) => ({
  owner: one(clubUsers, {
    fields: [clubs.ownerId],
    references: [clubUsers.id],
  }),
}));

export const clubMembersRelations = relations(clubMembers, ({ one, many }) => ({
  club: one(clubs, {
    fields: [clubMembers.clubId],
    references: [clubs.id],
  }),
  user: one(clubUsers, {
    fields: [clubMembers.userId],
    references: [clubUsers.id],
  }),
}));

// Indexes
export const clubMembersClubIdIdx = index('club_members_club_id_idx').on(clubMembers.clubId);
export const clubMembersUniqueIdx = uniqueIndex('club_members_club_user_unique_idx').on(clubMembers.clubId, clubMembers.userId);
"""

EXAMPLE_PRISMA_SCHEMA = """\
// Prisma Schema Example for PostgreSQL
generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider = "postgresql"
  url      = env("DATABASE_URL")
}

// Enums
enum Role {
  USER
  ADMIN
  MODERATOR
}

enum PostStatus {
  DRAFT
  PUBLISHED
  ARCHIVED
}

enum AuthProvider {
  GOOGLE
  TWITTER
  FACEBOOK
  DISCORD
}

// Models
model User {
  id            String    @id @default(uuid())
  email         String    @unique
  name          String?
  role          Role      @default(USER)
  authProvider  AuthProvider
  createdAt     DateTime  @default(now())
  updatedAt     DateTime  @updatedAt

  // Relations
  posts         Post[]
  comments      Comment[]
  profile       Profile?
  sessions      Session[]

  @@index([email])
  @@index([role])
}

model Profile {
  id        String   @id @default(uuid())
  userId    String   @unique
  bio       String?
  avatar    String?
  website   String?
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt

  // Relations
  user      User     @relation(fields: [userId], references: [id], onDelete: Cascade)
}

model Post {
  id          String     @id @default(uuid())
  title       String     @db.VarChar(255)
  content     String?    @db.Text
  status      PostStatus @default(DRAFT)
  published   Boolean    @default(false)
  authorId    String
  categoryId  String?
  views       Int        @default(0)
  createdAt   DateTime   @default(now())
  updatedAt   DateTime   @updatedAt
  publishedAt DateTime?

  // Relations
  author      User       @relation(fields: [authorId], references: [id], onDelete: Cascade)
  category    Category?  @relation(fields: [categoryId], references: [id])
  comments    Comment[]
  tags        PostTag[]

  @@index([authorId])
  @@index([categoryId])
  @@index([status, published])
  @@unique([authorId, title])
}

model Category {
  id          String   @id @default(uuid())
  name        String   @unique
  slug        String   @unique
  description String?
  createdAt   DateTime @default(now())
  updatedAt   DateTime @updatedAt

  // Relations
  posts       Post[]
}

model Tag {
  id        String    @id @default(uuid())
  name      String    @unique
  slug      String    @unique
  createdAt DateTime  @default(now())

  // Relations
  posts     PostTag[]
}

model PostTag {
  postId    String
  tagId     String
  createdAt DateTime @default(now())

  // Relations
  post      Post     @relation(fields: [postId], references: [id], onDelete: Cascade)
  tag       Tag      @relation(fields: [tagId], references: [id], onDelete: Cascade)

  @@id([postId, tagId])
  @@index([postId])
  @@index([tagId])
}

model Comment {
  id        String   @id @default(uuid())
  content   String   @db.Text
  postId    String
  authorId  String
  parentId  String?
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt

  // Relations
  post      Post      @relation(fields: [postId], references: [id], onDelete: Cascade)
  author    User      @relation(fields: [authorId], references: [id], onDelete: Cascade)
  parent    Comment?  @relation("CommentReplies", fields: [parentId], references: [id])
  replies   Comment[] @relation("CommentReplies")

  @@index([postId])
  @@index([authorId])
  @@index([parentId])
}

model Session {
  id        String   @id @default(uuid())
  userId    String
  token     String   @unique
  expiresAt DateTime
  createdAt DateTime @default(now())

  // Relations
  user      User     @relation(fields: [userId], references: [id], onDelete: Cascade)

  @@index([userId])
  @@index([token])
  @@index([expiresAt])
}
"""

EXAMPLES = {
    "drizzle": EXAMPLE_DRIZZLE_SCHEMA,
    "prisma": EXAMPLE_PRISMA_SCHEMA,
}
