"""Skill documents: universal methodology guides plus framework patterns."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claude_starter.generation import frontmatter
from claude_starter.generation.models import Artifact

if TYPE_CHECKING:
    from claude_starter.detection.classifier import StackDescriptor

SKILLS_DIR = ".claude/skills"


def _skill(name: str, description: str, summary: str, globs: list[str], body: str) -> Artifact:
    meta = {"name": name, "description": description, "globs": globs}
    return Artifact(
        kind="skill",
        path=f"{SKILLS_DIR}/{name}.md",
        content=frontmatter.render(meta, body),
        summary=summary,
    )


# ---------------------------------------------------------------------------
# Universal skills
# ---------------------------------------------------------------------------

_PATTERN_DISCOVERY = """\
# Pattern Discovery

When starting work on a project, analyze the existing code to understand its patterns.

## Discovery Process

### 1. Check for Existing Documentation

```
Look for:
- README.md, CONTRIBUTING.md
- docs/ folder
- Code comments and JSDoc/TSDoc
- .editorconfig, .prettierrc, eslint config
```

### 2. Analyze Project Structure

```
Questions to answer:
- How are files organized? (by feature, by type, flat?)
- Where does business logic live?
- Where are tests located?
- How are configs managed?
```

### 3. Detect Code Patterns

```
Look at 3-5 similar files to find:
- Naming conventions (camelCase, snake_case, PascalCase)
- Import organization (grouped? sorted? relative vs absolute?)
- Export style (named, default, barrel files?)
- Error handling approach
- Logging patterns
```

### 4. Identify Architecture

```
Common patterns to detect:
- MVC / MVVM / Clean Architecture
- Repository pattern
- Service layer
- Dependency injection
- Event-driven
- Functional vs OOP
```

## When No Code Exists

If starting a new project:

1. Ask about preferred patterns
2. Check package.json/config files for framework hints
3. Use sensible defaults for detected stack
4. Document decisions in `.claude/state/task.md`

## Important

- **Match existing patterns** - don't impose new ones
- **When in doubt, check similar files** in the codebase
- **Document as you discover** - note patterns in task state
- **Ask if unclear** - better to ask than assume
"""

_SYSTEMATIC_DEBUGGING = """\
# Systematic Debugging

A 4-phase methodology for finding and fixing bugs efficiently.

## Phase 1: Reproduce

Before fixing, confirm you can reproduce the bug.

```
1. Get exact steps to reproduce
2. Identify expected vs actual behavior
3. Note any error messages verbatim
4. Check if it's consistent or intermittent
```

## Phase 2: Locate

Narrow down where the bug occurs.

```
Techniques:
- Binary search through code flow
- Add logging at key points
- Check recent changes (git log, git diff)
- Review stack traces carefully
- Use debugger breakpoints
```

## Phase 3: Diagnose

Understand WHY the bug happens.

```
Questions:
- What assumptions are being violated?
- What state is unexpected?
- Is this a logic error, data error, or timing issue?
- Are there edge cases not handled?
```

## Phase 4: Fix

Apply the minimal correct fix.

```
Guidelines:
- Fix the root cause, not symptoms
- Make the smallest change that fixes the issue
- Add a test that would have caught this bug
- Check for similar bugs elsewhere
- Update documentation if needed
```

## Quick Reference

| Symptom | Check First |
|---------|-------------|
| TypeError | Null/undefined values, type mismatches |
| Off-by-one | Loop bounds, array indices |
| Race condition | Async operations, shared state |
| Memory leak | Event listeners, subscriptions, closures |
| Infinite loop | Exit conditions, recursive calls |
"""

_TESTING_INTRO = """\
# Testing Methodology

## Testing Framework

This project uses: **{framework}**

## The AAA Pattern

Structure every test with:

```
Arrange - Set up test data and conditions
Act     - Execute the code being tested
Assert  - Verify the expected outcome
```

## What to Test

### Must Test
- Core business logic
- Edge cases and boundaries
- Error handling paths
- Public API contracts

### Consider Testing
- Integration points
- Complex conditional logic
- State transitions

### Skip Testing
- Framework internals
- Simple getters/setters
- Configuration constants

## Example Patterns
"""

_TESTING_OUTRO = """\
## Test Naming

```
Format: [unit]_[scenario]_[expected result]

Examples:
- calculateTotal_withEmptyCart_returnsZero
- userService_createUser_savesToDatabase
- parseDate_invalidFormat_throwsError
```

## Mocking Guidelines

1. **Mock external dependencies** - APIs, databases, file system
2. **Don't mock what you own** - Prefer real implementations for your code
3. **Keep mocks simple** - Complex mocks often indicate design issues
4. **Reset mocks between tests** - Avoid state leakage

## Coverage Philosophy

- Aim for **80%+ coverage** on critical paths
- Don't chase 100% - it often leads to brittle tests
- Focus on **behavior coverage**, not line coverage
"""

_JS_TEST_EXAMPLE = """\
```typescript
import { describe, it, expect } from '__RUNNER__';

describe('UserService', () => {
  it('should create user with valid data', async () => {
    // Arrange
    const userData = { name: 'Test', email: 'test@example.com' };

    // Act
    const user = await userService.create(userData);

    // Assert
    expect(user.id).toBeDefined();
    expect(user.name).toBe('Test');
  });

  it('should throw on invalid email', async () => {
    // Arrange
    const userData = { name: 'Test', email: 'invalid' };

    // Act & Assert
    await expect(userService.create(userData)).rejects.toThrow('Invalid email');
  });
});
```"""

_PYTEST_EXAMPLE = """\
```python
import pytest
from myapp.services import UserService

class TestUserService:
    def test_create_user_with_valid_data(self, db_session):
        # Arrange
        user_data = {"name": "Test", "email": "test@example.com"}
        service = UserService(db_session)

        # Act
        user = service.create(user_data)

        # Assert
        assert user.id is not None
        assert user.name == "Test"

    def test_create_user_invalid_email_raises(self, db_session):
        # Arrange
        user_data = {"name": "Test", "email": "invalid"}
        service = UserService(db_session)

        # Act & Assert
        with pytest.raises(ValueError, match="Invalid email"):
            service.create(user_data)
```"""

_GO_TEST_EXAMPLE = """\
```go
func TestUserService_Create(t *testing.T) {
    t.Run("creates user with valid data", func(t *testing.T) {
        // Arrange
        svc := NewUserService(mockDB)
        userData := UserInput{Name: "Test", Email: "test@example.com"}

        // Act
        user, err := svc.Create(userData)

        // Assert
        assert.NoError(t, err)
        assert.NotEmpty(t, user.ID)
        assert.Equal(t, "Test", user.Name)
    })

    t.Run("returns error on invalid email", func(t *testing.T) {
        // Arrange
        svc := NewUserService(mockDB)
        userData := UserInput{Name: "Test", Email: "invalid"}

        // Act
        _, err := svc.Create(userData)

        // Assert
        assert.ErrorContains(t, err, "invalid email")
    })
}
```"""

_GENERIC_TEST_EXAMPLE = """\
```
// Add examples for your testing framework here
describe('Component', () => {
  it('should behave correctly', () => {
    // Arrange - set up test conditions
    // Act - execute the code
    // Assert - verify results
  });
});
```"""


def runner_example(testing_framework: str | None) -> str:
    """Code example block embedded in the testing methodology skill."""
    if testing_framework in ("vitest", "jest"):
        return _JS_TEST_EXAMPLE.replace("__RUNNER__", testing_framework)
    if testing_framework == "pytest":
        return _PYTEST_EXAMPLE
    if testing_framework == "go-test":
        return _GO_TEST_EXAMPLE
    return _GENERIC_TEST_EXAMPLE


def pattern_discovery_skill() -> Artifact:
    return _skill(
        "pattern-discovery",
        "Analyze existing codebase to discover and document patterns",
        "Finding codebase patterns",
        [
            "src/**/*",
            "lib/**/*",
            "app/**/*",
            "components/**/*",
            "pages/**/*",
            "api/**/*",
            "services/**/*",
        ],
        _PATTERN_DISCOVERY,
    )


def systematic_debugging_skill() -> Artifact:
    return _skill(
        "systematic-debugging",
        "Methodical approach to finding and fixing bugs",
        "Debugging approach",
        ["**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/*.py", "**/*.go", "**/*.rs"],
        _SYSTEMATIC_DEBUGGING,
    )


def methodology_skill(stack: StackDescriptor) -> Artifact:
    framework = stack.testing_framework or "generic"
    body = (
        _TESTING_INTRO.replace("{framework}", framework)
        + "\n"
        + runner_example(stack.testing_framework)
        + "\n\n"
        + _TESTING_OUTRO
    )
    return _skill(
        "testing-methodology",
        "Testing patterns and best practices for this project",
        "Testing strategy",
        ["**/*.test.*", "**/*.spec.*", "**/test/**", "**/tests/**", "**/__tests__/**"],
        body,
    )


# ---------------------------------------------------------------------------
# Framework skills
# ---------------------------------------------------------------------------

_NEXTJS = """\
# Next.js Patterns (App Router)

## File Conventions

| File | Purpose |
|------|---------|
| `page.tsx` | Route UI |
| `layout.tsx` | Shared layout wrapper |
| `loading.tsx` | Loading UI (Suspense) |
| `error.tsx` | Error boundary |
| `not-found.tsx` | 404 page |
| `route.ts` | API endpoint |

## Server vs Client Components

```tsx
// Server Component (default) - runs on server only
export default function ServerComponent() {
  // Can use: async/await, direct DB access, server-only code
  // Cannot use: useState, useEffect, browser APIs
  return <div>Server rendered</div>;
}

// Client Component - runs on client
'use client';
export default function ClientComponent() {
  // Can use: hooks, event handlers, browser APIs
  const [state, setState] = useState();
  return <button onClick={() => setState(...)}>Click</button>;
}
```

## Data Fetching

```tsx
// Server Component - fetch directly
async function ProductPage({ params }: { params: { id: string } }) {
  const product = await db.product.findUnique({ where: { id: params.id } });
  return <ProductDetails product={product} />;
}

// With caching
const getData = cache(async (id: string) => {
  return await db.find(id);
});
```

## Server Actions

```tsx
// actions.ts
'use server';

export async function createPost(formData: FormData) {
  const title = formData.get('title');
  await db.post.create({ data: { title } });
  revalidatePath('/posts');
}

// In component
<form action={createPost}>
  <input name="title" />
  <button type="submit">Create</button>
</form>
```

## Route Handlers

```tsx
// app/api/users/route.ts
import { NextResponse } from 'next/server';

export async function GET() {
  const users = await db.user.findMany();
  return NextResponse.json(users);
}

export async function POST(request: Request) {
  const body = await request.json();
  const user = await db.user.create({ data: body });
  return NextResponse.json(user, { status: 201 });
}
```

## Patterns to Follow

1. **Default to Server Components** - Only use 'use client' when needed
2. **Colocate related files** - Keep components near their routes
3. **Use route groups** - `(auth)/login` for organization without URL impact
4. **Parallel routes** - `@modal/` for simultaneous rendering
5. **Intercepting routes** - `(.)/photo` for modal patterns
"""

_REACT = """\
# React Component Patterns

## Component Structure

```tsx
// Standard component structure
import { useState, useCallback } from 'react';
import type { ComponentProps } from './types';

interface Props {
  title: string;
  onAction?: () => void;
  children?: React.ReactNode;
}

export function MyComponent({ title, onAction, children }: Props) {
  const [state, setState] = useState(false);

  const handleClick = useCallback(() => {
    setState(true);
    onAction?.();
  }, [onAction]);

  return (
    <div>
      <h1>{title}</h1>
      <button onClick={handleClick}>Action</button>
      {children}
    </div>
  );
}
```

## Hooks Patterns

```tsx
// Custom hook for data fetching
function useUser(id: string) {
  const [user, setUser] = useState<User | null>(null);
  const [loading, setLoading] = useState(true);
  const [error, setError] = useState<Error | null>(null);

  useEffect(() => {
    fetchUser(id)
      .then(setUser)
      .catch(setError)
      .finally(() => setLoading(false));
  }, [id]);

  return { user, loading, error };
}
```

## State Management

```tsx
// Use reducer for complex state
const [state, dispatch] = useReducer(reducer, initialState);

// Use context for shared state
const ThemeContext = createContext<Theme>('light');
export const useTheme = () => useContext(ThemeContext);
```

## Performance

1. **Memoize expensive calculations**: `useMemo`
2. **Memoize callbacks**: `useCallback`
3. **Memoize components**: `React.memo`
4. **Avoid inline objects/arrays in props**

## Testing

```tsx
import { render, screen, fireEvent } from '@testing-library/react';

test('button triggers action', () => {
  const onAction = vi.fn();
  render(<MyComponent title="Test" onAction={onAction} />);

  fireEvent.click(screen.getByRole('button'));

  expect(onAction).toHaveBeenCalled();
});
```
"""

_FASTAPI = """\
# FastAPI Patterns

## Router Structure

```python
# routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas import UserCreate, UserResponse
from app.services import UserService

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/", response_model=list[UserResponse])
async def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    service = UserService(db)
    return service.get_all(skip=skip, limit=limit)

@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(
    user: UserCreate,
    db: Session = Depends(get_db)
):
    service = UserService(db)
    return service.create(user)
```

## Dependency Injection

```python
# Dependencies
def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    user = decode_token(token)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user

def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin required")
    return user

# Usage
@router.delete("/{id}")
async def delete_user(id: int, admin: User = Depends(require_admin)):
    ...
```

## Pydantic Schemas

```python
from pydantic import BaseModel, EmailStr, Field

class UserBase(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)

class UserCreate(UserBase):
    password: str = Field(..., min_length=8)

class UserResponse(UserBase):
    id: int
    created_at: datetime

    class Config:
        from_attributes = True  # For ORM mode
```

## Error Handling

```python
from fastapi import HTTPException
from fastapi.responses import JSONResponse

# Custom exception
class NotFoundError(Exception):
    def __init__(self, resource: str, id: int):
        self.resource = resource
        self.id = id

# Exception handler
@app.exception_handler(NotFoundError)
async def not_found_handler(request, exc: NotFoundError):
    return JSONResponse(
        status_code=404,
        content={"error": f"{exc.resource} {exc.id} not found"}
    )
```

## Testing

```python
from fastapi.testclient import TestClient

def test_create_user(client: TestClient):
    response = client.post("/users/", json={
        "email": "test@example.com",
        "name": "Test",
        "password": "password123"
    })
    assert response.status_code == 201
    assert response.json()["email"] == "test@example.com"
```
"""

_NESTJS = """\
# NestJS Patterns

## Module Structure

```typescript
// users/users.module.ts
import { Module } from '@nestjs/common';
import { TypeOrmModule } from '@nestjs/typeorm';
import { UsersController } from './users.controller';
import { UsersService } from './users.service';
import { User } from './entities/user.entity';

@Module({
  imports: [TypeOrmModule.forFeature([User])],
  controllers: [UsersController],
  providers: [UsersService],
  exports: [UsersService],
})
export class UsersModule {}
```

## Controller Pattern

```typescript
// users/users.controller.ts
import { Controller, Get, Post, Body, Param, UseGuards } from '@nestjs/common';
import { UsersService } from './users.service';
import { CreateUserDto } from './dto/create-user.dto';
import { JwtAuthGuard } from '../auth/jwt-auth.guard';

@Controller('users')
export class UsersController {
  constructor(private readonly usersService: UsersService) {}

  @Get()
  findAll() {
    return this.usersService.findAll();
  }

  @Get(':id')
  findOne(@Param('id') id: string) {
    return this.usersService.findOne(+id);
  }

  @Post()
  @UseGuards(JwtAuthGuard)
  create(@Body() createUserDto: CreateUserDto) {
    return this.usersService.create(createUserDto);
  }
}
```

## Service Pattern

```typescript
// users/users.service.ts
import { Injectable, NotFoundException } from '@nestjs/common';
import { InjectRepository } from '@nestjs/typeorm';
import { Repository } from 'typeorm';
import { User } from './entities/user.entity';

@Injectable()
export class UsersService {
  constructor(
    @InjectRepository(User)
    private usersRepository: Repository<User>,
  ) {}

  findAll(): Promise<User[]> {
    return this.usersRepository.find();
  }

  async findOne(id: number): Promise<User> {
    const user = await this.usersRepository.findOne({ where: { id } });
    if (!user) {
      throw new NotFoundException(`User #${id} not found`);
    }
    return user;
  }
}
```

## DTO Validation

```typescript
// dto/create-user.dto.ts
import { IsEmail, IsString, MinLength } from 'class-validator';

export class CreateUserDto {
  @IsEmail()
  email: string;

  @IsString()
  @MinLength(1)
  name: string;

  @IsString()
  @MinLength(8)
  password: string;
}
```

## Testing

```typescript
describe('UsersService', () => {
  let service: UsersService;
  let repository: MockType<Repository<User>>;

  beforeEach(async () => {
    const module = await Test.createTestingModule({
      providers: [
        UsersService,
        { provide: getRepositoryToken(User), useFactory: repositoryMockFactory },
      ],
    }).compile();

    service = module.get(UsersService);
    repository = module.get(getRepositoryToken(User));
  });

  it('should find all users', async () => {
    const users = [{ id: 1, name: 'Test' }];
    repository.find.mockReturnValue(users);

    expect(await service.findAll()).toEqual(users);
  });
});
```
"""

_DATABASE = """\
# Database Patterns

## Schema Changes

1. Change the schema definition first
2. Generate a migration, never edit applied migrations
3. Review the generated SQL before applying it
4. Apply the migration locally and run the test suite

## Queries

- Select only the columns you need
- Paginate list queries; never return unbounded result sets
- Batch related lookups instead of querying inside loops (N+1)
- Wrap multi-step writes in a transaction

## Data Access Layer

- Keep queries in repository/service modules, not in route handlers
- Return plain data from the data layer, not ORM sessions or builders
- Validate input before it reaches the database

## Testing

- Use a dedicated test database or an in-memory equivalent
- Reset state between tests (transactions or truncation)
- Seed only the rows a test actually needs
"""


# (framework tag, name, description, summary, globs, body)
_FRAMEWORK_SKILLS: tuple[tuple[str, str, str, str, list[str], str], ...] = (
    (
        "nextjs",
        "nextjs-patterns",
        "Next.js App Router patterns and best practices",
        "Next.js App Router patterns",
        ["app/**/*", "src/app/**/*", "components/**/*"],
        _NEXTJS,
    ),
    (
        "react",
        "react-components",
        "React component patterns and best practices",
        "React component patterns",
        ["src/components/**/*", "components/**/*", "**/*.tsx", "**/*.jsx"],
        _REACT,
    ),
    (
        "fastapi",
        "fastapi-patterns",
        "FastAPI endpoint patterns and best practices",
        "FastAPI endpoint patterns",
        ["app/**/*.py", "src/**/*.py", "api/**/*.py", "routers/**/*.py"],
        _FASTAPI,
    ),
    (
        "nestjs",
        "nestjs-patterns",
        "NestJS module patterns and best practices",
        "NestJS module patterns",
        ["src/**/*.ts", "**/*.module.ts", "**/*.controller.ts", "**/*.service.ts"],
        _NESTJS,
    ),
)


def framework_skills(stack: StackDescriptor) -> list[Artifact]:
    """One guide per whitelisted framework present in *stack*.

    The base React guide is only produced when Next.js is absent.
    """
    artifacts: list[Artifact] = []
    for tag, name, description, summary, globs, body in _FRAMEWORK_SKILLS:
        if tag not in stack.frameworks:
            continue
        if tag == "react" and "nextjs" in stack.frameworks:
            continue
        artifacts.append(_skill(name, description, summary, globs, body))

    if "prisma" in stack.frameworks or "drizzle" in stack.frameworks:
        artifacts.append(
            _skill(
                "database-patterns",
                "Database schema, migration and query patterns",
                "Database and ORM patterns",
                ["prisma/**/*", "drizzle/**/*", "**/schema.*", "**/migrations/**"],
                _DATABASE,
            )
        )
    return artifacts


def generate_skills(stack: StackDescriptor) -> list[Artifact]:
    return [
        pattern_discovery_skill(),
        systematic_debugging_skill(),
        methodology_skill(stack),
        *framework_skills(stack),
    ]
