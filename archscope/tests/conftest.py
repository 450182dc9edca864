import pytest
import json
from pathlib import Path
from typing import Callable


def write_file(root: Path, relative_path: str, content: str = "") -> Path:
    """Create a file (and its parent directories) under root."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write files into a temporary project root."""
    def _make(relative_path: str, content: str = "") -> Path:
        return write_file(tmp_path, relative_path, content)
    return _make


SCHEMA = """
generator client {
  provider = "prisma-client-js"
}

model User {
  id        String   @id @default(cuid())
  email     String   @unique
  name      String?
  posts     Post[]
  groups    Group[]
  profile   Profile?

  @@index([email])
}

model Post {
  id       String @id
  title    String
  author   User   @relation(fields: [authorId], references: [id])
  authorId String
}

model Profile {
  id     String @id
  user   User   @relation(fields: [userId], references: [id])
  userId String @unique
}

model Group {
  id      String @id
  members User[]
}

enum Role {
  USER
  ADMIN
}
"""


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Create a small Next.js-shaped project for testing."""
    write_file(tmp_path, "package.json", json.dumps({"name": "sample-app", "version": "1.0.0"}))

    write_file(tmp_path, "app/api/users/route.ts", """
import { NextResponse } from "next/server";
import { db } from "@/lib/db";

export async function GET() {
  return NextResponse.json(await db.user.findMany());
}

export async function POST(request: Request) {
  const body = await request.json();
  return NextResponse.json(await db.user.create({ data: body }));
}
""")

    write_file(tmp_path, "app/api/admin/stats/route.ts", """
import { requireAdmin } from "@/lib/auth";

export const GET = async () => {
  await requireAdmin();
  return Response.json({ ok: true });
};
""")

    write_file(tmp_path, "app/api/posts/[id]/route.ts", """
import { getServerSession } from "next-auth";

export async function DELETE() {
  const session = await getServerSession();
  if (!session) return new Response("Unauthorized", { status: 401 });
  return new Response(null, { status: 204 });
}

export function PATCH() {
  return new Response(null);
}
""")

    write_file(tmp_path, "app/page.tsx", """
import Header from "@/components/Header";

export default function Home() {
  return <Header />;
}
""")

    write_file(tmp_path, "app/Dashboard.tsx", """'use client';
import { useState } from "react";
import Header from "../components/Header";
import { Button } from "@/components/ui/Button";
import { formatDate } from "@/lib/format";

export default function Dashboard() {
  const [open, setOpen] = useState(false);
  return <Header />;
}
""")

    write_file(tmp_path, "components/Header.tsx", """
import { Button } from "./ui/Button";
import { formatDate } from "../lib/format";

export default function Header() {
  return <Button>{formatDate(new Date())}</Button>;
}
""")

    write_file(tmp_path, "components/ui/Button.tsx", """"use client"

export function Button(props) {
  return <button {...props} />;
}
""")

    write_file(tmp_path, "components/ui/helpers.ts", "export const noop = () => {};\n")

    write_file(tmp_path, "lib/format.ts", """
export function formatDate(d: Date) {
  return d.toISOString();
}
""")

    write_file(tmp_path, "lib/db.ts", """
import { formatDate } from "./format";
import { formatDate as again } from "./format";
import "./missing";

export const db = {};
""")

    write_file(tmp_path, "lib/auth.ts", """
import { db } from "./db";
import * as utils from "./index";

export async function requireAdmin() {}
""")

    write_file(tmp_path, "lib/index.ts", "export * from './format';\n")

    write_file(tmp_path, "prisma/schema.prisma", SCHEMA)

    # Ignored directories must never be scanned
    write_file(tmp_path, "node_modules/pkg/index.js", "module.exports = {};\n")
    write_file(tmp_path, ".next/server/Chunk.tsx", "export default 1;\n")

    return tmp_path
